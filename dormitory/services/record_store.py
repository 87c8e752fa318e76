import traceback
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from dormitory.database.init import Base, build_session_factory
from dormitory.database.models import Bill, Building, Floor, Resident, Room, User
from dormitory.enums.table_name import RecordOperation, TableName
from dormitory.schemas.record_schema import RECORD_SCHEMAS, coerce_id
from dormitory.services.billing_service import bill_record_id

TABLE_MODELS = {
    TableName.USERS: User,
    TableName.BUILDINGS: Building,
    TableName.FLOORS: Floor,
    TableName.ROOMS: Room,
    TableName.RESIDENTS: Resident,
    TableName.BILLS: Bill,
}


class RecordStore:
    """
    Remote store of flat rows, one table per entity.

    fetch_all returns every row of every table keyed by table name;
    save upserts (ADD) or removes (DELETE) a single row by its id.
    """

    def prepare(self) -> None:
        pass

    def fetch_all(self) -> Optional[Dict[str, List[Dict[str, Any]]]]:
        raise NotImplementedError

    def save(self, table: TableName, operation: RecordOperation, record: Mapping[str, Any]) -> None:
        raise NotImplementedError


def row_to_record(obj) -> Dict[str, Any]:
    """ORM row as a plain dict keyed by the store's column names."""
    mapper = inspect(obj).mapper
    return {attr.columns[0].name: getattr(obj, attr.key) for attr in mapper.column_attrs}


class SqlRecordStore(RecordStore):
    def __init__(self, bind):
        self.engine = bind
        self.session_factory = build_session_factory(bind)

    def prepare(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def fetch_all(self) -> Dict[str, List[Dict[str, Any]]]:
        with self.session_factory() as db:
            return {
                str(table): [row_to_record(obj) for obj in db.query(model).all()]
                for table, model in TABLE_MODELS.items()
            }

    def save(self, table, operation, record) -> None:
        table = TableName(table)
        operation = RecordOperation(operation)
        with self.session_factory() as db:
            if operation == RecordOperation.DELETE:
                self._delete(db, table, coerce_id(record.get("id")))
            else:
                self._upsert(db, table, record)
            db.commit()

    def _upsert(self, db: Session, table: TableName, record: Mapping[str, Any]) -> None:
        validated = RECORD_SCHEMAS[table].model_validate(record)
        values = validated.model_dump(exclude_unset=True)
        if table == TableName.BILLS and not values.get("id"):
            values["id"] = bill_record_id(validated.room_id, validated.month)
        # merge only copies the columns present in the payload onto an existing row
        db.merge(TABLE_MODELS[table](**values))

    def _delete(self, db: Session, table: TableName, record_id: Optional[str]) -> None:
        if record_id is None:
            raise ValueError(f"Cannot delete from {table} without an id")

        # Descendant rows go with their parent so they cannot be re-attached
        # to a later entity that reuses the id.
        if table == TableName.BUILDINGS:
            floor_ids = [
                row.id for row in db.query(Floor.id).filter(Floor.building_id == record_id)
            ]
            self._delete_floors(db, floor_ids)
        elif table == TableName.FLOORS:
            self._delete_floors(db, [record_id])
        elif table == TableName.ROOMS:
            self._delete_rooms(db, [record_id])

        model = TABLE_MODELS[table]
        db.query(model).filter(model.id == record_id).delete(synchronize_session=False)

    def _delete_floors(self, db: Session, floor_ids: List[str]) -> None:
        if not floor_ids:
            return
        room_ids = [row.id for row in db.query(Room.id).filter(Room.floor_id.in_(floor_ids))]
        self._delete_rooms(db, room_ids)
        db.query(Floor).filter(Floor.id.in_(floor_ids)).delete(synchronize_session=False)

    def _delete_rooms(self, db: Session, room_ids: List[str]) -> None:
        if not room_ids:
            return
        db.query(Resident).filter(Resident.room_id.in_(room_ids)).delete(synchronize_session=False)
        db.query(Bill).filter(Bill.room_id.in_(room_ids)).delete(synchronize_session=False)
        db.query(Room).filter(Room.id.in_(room_ids)).delete(synchronize_session=False)


class RemoteWriter:
    """
    Single-attempt writes issued after a local state change. A failed write
    is reported and otherwise ignored: local state is not rolled back.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def __call__(self, table: TableName, operation: RecordOperation, record: Mapping[str, Any]) -> bool:
        try:
            self.store.save(table, operation, record)
            return True
        except Exception as e:
            print(f"Error saving {operation} to {table} (id={record.get('id')}): {e}")
            traceback.print_exc()
            return False

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from typing import Optional

from dormitory.config import DEBUG, APP_HOST, APP_PORT
from dormitory.database.init import engine
from dormitory.services.dormitory_service import DormitoryService
from dormitory.services.record_store import RecordStore, SqlRecordStore
from dormitory.routes import (
    auth_routes,
    building_routes,
    resident_routes,
    bill_routes,
    analytics_routes,
)


def create_app(store: Optional[RecordStore] = None) -> FastAPI:
    app = FastAPI(title="Dormitory Management API", debug=DEBUG)
    app.state.dormitory = DormitoryService(store or SqlRecordStore(engine))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_routes.router)
    app.include_router(building_routes.router)
    app.include_router(resident_routes.router)
    app.include_router(bill_routes.router)
    app.include_router(analytics_routes.router)

    @app.on_event("startup")
    async def load_dormitory():
        dormitory = app.state.dormitory
        try:
            dormitory.store.prepare()
        except Exception as e:
            print(f"Error preparing the record store: {str(e)}")
        snapshot = dormitory.load()
        print(
            f"Loaded {len(snapshot.buildings)} buildings"
            + (" (offline data)" if snapshot.offline else "")
        )

    @app.get("/")
    def read_root():
        return {"name": "Dormitory Management API", "version": "1.0.0"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("dormitory.main:app", host=APP_HOST, port=APP_PORT, reload=DEBUG)

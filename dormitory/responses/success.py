from .base import build_response


def data_response(data=None):
    return build_response(200, status='success', data=data)


def empty_response():
    return build_response(204)

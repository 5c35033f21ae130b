# payroll_api/common/http.py
from flask import jsonify


def ok(data=None, status=200):
    return jsonify(data), status


def no_content():
    return "", 204


def fail(message="Bad Request", status=400, code=None, errors=None):
    body = {"message": message}
    if code: body["code"] = code
    if errors: body["errors"] = errors
    return jsonify(body), status

from __future__ import annotations

from flask import Flask

from ..common.web import current_user_id, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/todos", methods=["GET"], endpoint="todos_list")
    @login_required
    def todos_list():
        todos = container.todo_service.list(current_user_id())
        return ok([t.to_dict() for t in todos], count=len(todos))

    @app.route("/todos/date/<value>", methods=["GET"], endpoint="todos_for_date")
    @login_required
    def todos_for_date(value: str):
        todos = container.todo_service.list_for_date(current_user_id(), value)
        return ok([t.to_dict() for t in todos], count=len(todos))

    @app.route("/todos/subject/<int:subject_id>", methods=["GET"], endpoint="todos_for_subject")
    @login_required
    def todos_for_subject(subject_id: int):
        todos = container.todo_service.list_for_subject(current_user_id(), subject_id)
        return ok([t.to_dict() for t in todos], count=len(todos))

    @app.route("/todos/<int:todo_id>", methods=["GET"], endpoint="todos_get")
    @login_required
    def todos_get(todo_id: int):
        return ok(container.todo_service.get(current_user_id(), todo_id).to_dict())

    @app.route("/todos", methods=["POST"], endpoint="todos_create")
    @login_required
    def todos_create():
        todo = container.todo_service.create(current_user_id(), json_body())
        return ok(todo.to_dict(), status=201)

    @app.route("/todos/<int:todo_id>", methods=["PUT"], endpoint="todos_update")
    @login_required
    def todos_update(todo_id: int):
        return ok(container.todo_service.update(current_user_id(), todo_id, json_body()).to_dict())

    @app.route("/todos/<int:todo_id>", methods=["DELETE"], endpoint="todos_delete")
    @login_required
    def todos_delete(todo_id: int):
        container.todo_service.delete(current_user_id(), todo_id)
        return ok({}, message="Todo deleted")

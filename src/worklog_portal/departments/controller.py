from __future__ import annotations

from flask import Flask, render_template, request

from ..common.validators import optional_int
from ..container import Container
from ..middleware.session_context import current_context, current_services
from .service import build_team_nodes, hierarchy_export


def register(app: Flask, container: Container) -> None:
    @app.route("/departments", endpoint="departments")
    def departments():
        ctx = current_context()
        service = current_services().department_service
        listing = service.list_departments(ctx)

        selected_id = optional_int(request.args.get("departmentId")) or service.default_department_id(ctx, listing)
        if selected_id is None and listing:
            selected_id = listing[0].id

        search = request.args.get("search", "").strip()
        expand = request.args.get("expand")
        hierarchy = service.hierarchy(ctx, selected_id) if selected_id is not None else None
        nodes = build_team_nodes(hierarchy, search=search, expand=expand) if hierarchy else []

        return render_template(
            "departments.html",
            ctx=ctx,
            departments=listing,
            selected_id=selected_id,
            hierarchy=hierarchy,
            nodes=nodes,
            search=search,
            active_page="departments",
        )

    @app.route("/departments/<int:department_id>/export", endpoint="department_export")
    def department_export(department_id: int):
        ctx = current_context()
        filename, document = hierarchy_export(current_services().department_service.hierarchy(ctx, department_id))
        return app.response_class(
            document,
            mimetype="application/json",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..api.errors import BackendError, display_message
from ..common.json_utils import to_jsonable
from ..common.validators import optional_int
from ..container import Container
from ..middleware.session_context import current_context, current_services, session_token
from ..worklogs.controller import period_from_request


def register(app: Flask, container: Container) -> None:
    guard = container.request_guard

    def _latest_only(view_name: str, build):
        """Answer with the built view unless a newer request for the same view started meanwhile."""
        seq = request.args.get("seq")
        ticket = guard.issue((session_token(), view_name))
        payload = build()
        if not guard.is_current(ticket):
            return jsonify({"stale": True, "seq": seq})
        return jsonify({"stale": False, "seq": seq, "data": to_jsonable(payload)})

    @app.route("/dashboard", endpoint="dashboard")
    def dashboard():
        ctx = current_context()
        period, date_range, problem = period_from_request()
        if problem:
            flash(problem, "warning")

        view = current_services().report_service.dashboard(ctx, date_range)
        return render_template("dashboard.html", ctx=ctx, view=view, period=period.value, active_page="dashboard")

    def _team_view():
        ctx = current_context()
        period, date_range, problem = period_from_request()
        view = current_services().report_service.team(
            ctx, date_range, employee_id=optional_int(request.args.get("employeeId"))
        )
        return ctx, period, view, problem

    @app.route("/team", endpoint="team")
    def team():
        ctx, period, view, problem = _team_view()
        if problem:
            flash(problem, "warning")
        return render_template("team.html", ctx=ctx, view=view, period=period.value, active_page="team")

    @app.route("/team/data", endpoint="team_data")
    def team_data():
        return _latest_only("team", lambda: _team_view()[2])

    def _employee_view(employee_id: int):
        ctx = current_context()
        period, date_range, problem = period_from_request()
        view = current_services().report_service.employee_detail(ctx, employee_id, date_range)
        return ctx, period, view, problem

    @app.route("/employees/<int:employee_id>", endpoint="employee_detail")
    def employee_detail(employee_id: int):
        ctx = current_context()
        try:
            _, period, view, problem = _employee_view(employee_id)
        except BackendError as e:
            # Only the employee lookup propagates; the other fetches degrade inside the view.
            flash(display_message(e.failure), "danger")
            return redirect(url_for("dashboard"))
        if problem:
            flash(problem, "warning")
        if view.worklogs_error:
            flash(view.worklogs_error, "danger")
        return render_template(
            "employee_detail.html", ctx=ctx, view=view, period=period.value, active_page="team"
        )

    @app.route("/employees/<int:employee_id>/data", endpoint="employee_detail_data")
    def employee_detail_data(employee_id: int):
        return _latest_only(f"employee:{employee_id}", lambda: _employee_view(employee_id)[2])

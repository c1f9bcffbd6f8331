from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..api.errors import BackendError, display_message
from ..common.datetime_utils import DateRange, resolve_date_range
from ..container import Container
from ..core.enums import PeriodFilter
from ..core.exceptions import AuthorizationError, InvalidDateError, ValidationError
from ..middleware.session_context import current_context, current_services
from .service import group_by_date, total_hours


def period_from_request():
    """(period, date range, error message) from ``period``/``startDate``/``endDate``."""
    try:
        period, date_range = resolve_date_range(
            request.args.get("period"),
            request.args.get("startDate"),
            request.args.get("endDate"),
        )
        return period, date_range, None
    except InvalidDateError as e:
        return PeriodFilter.WEEK, DateRange.for_period(PeriodFilter.WEEK), str(e)


def register(app: Flask, container: Container) -> None:
    @app.route("/worklogs", endpoint="worklogs")
    def worklogs():
        ctx = current_context()
        period, date_range, problem = period_from_request()
        if problem:
            flash(problem, "warning")

        items = current_services().worklog_service.list_mine(date_range)
        return render_template(
            "worklogs/list.html",
            ctx=ctx,
            period=period.value,
            date_range=date_range,
            description=date_range.description(),
            days=group_by_date(items),
            total=total_hours(items),
            active_page="worklogs",
        )

    def _render_form(*, worklog=None, values, errors, types, status=200):
        return (
            render_template(
                "worklogs/form.html",
                ctx=current_context(),
                worklog=worklog,
                values=values,
                errors=errors,
                types=types,
                active_page="worklogs",
            ),
            status,
        )

    @app.route("/worklogs/new", methods=["GET", "POST"], endpoint="worklog_new")
    def worklog_new():
        service = current_services().worklog_service
        types = service.active_types()

        if request.method == "POST":
            try:
                service.create(request.form)
                flash("Worklog created successfully", "success")
                return redirect(url_for("worklogs"))
            except ValidationError as e:
                flash(str(e), "danger")
                return _render_form(values=request.form, errors=e.field_errors, types=types, status=400)

        return _render_form(values=service.form_defaults(), errors={}, types=types)

    @app.route("/worklogs/<int:worklog_id>/edit", methods=["GET", "POST"], endpoint="worklog_edit")
    def worklog_edit(worklog_id: int):
        service = current_services().worklog_service
        try:
            worklog = service.get_editable(worklog_id)
        except AuthorizationError as e:
            flash(str(e), "warning")
            return redirect(url_for("worklogs"))
        types = service.active_types()

        if request.method == "POST":
            try:
                service.update(worklog_id, request.form)
                flash("Worklog updated successfully", "success")
                return redirect(url_for("worklogs"))
            except ValidationError as e:
                flash(str(e), "danger")
                return _render_form(worklog=worklog, values=request.form, errors=e.field_errors, types=types, status=400)

        return _render_form(worklog=worklog, values=service.form_defaults(worklog), errors={}, types=types)

    @app.route("/worklogs/<int:worklog_id>/delete", methods=["POST"], endpoint="worklog_delete")
    def worklog_delete(worklog_id: int):
        try:
            current_services().worklog_service.delete(worklog_id)
            flash("Worklog deleted", "success")
        except BackendError as e:
            flash(display_message(e.failure), "danger")
        return redirect(url_for("worklogs"))

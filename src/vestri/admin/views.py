"""SQLAdmin model and tool views."""

from pydantic import TypeAdapter, ValidationError
from sqladmin import BaseView, ModelView, expose
from starlette.datastructures import UploadFile
from starlette.requests import Request
from starlette.responses import HTMLResponse

from vestri.database import AsyncSessionLocal
from vestri.exceptions import ImportValidationError
from vestri.models.showtime import Showtime
from vestri.schemas.showtime import ShowtimeCreate
from vestri.services.catalog import ShowtimeCatalog
from vestri.services.importer import parse_workbook
from vestri.services.temporal import local_now

_PREVIEW_ADAPTER = TypeAdapter(list[ShowtimeCreate])


class ShowtimeAdmin(ModelView, model=Showtime):
    name = "Showtime"
    name_plural = "Showtimes"
    icon = "fa-film"

    column_list = [
        Showtime.id,
        Showtime.screening_date,
        Showtime.start_time,
        Showtime.end_time,
        Showtime.title,
        Showtime.language,
        Showtime.subtitle_language,
        Showtime.sold_out,
        Showtime.annotation,
    ]
    column_labels = {
        Showtime.screening_date: "Date",
        Showtime.film_external_id: "TMDb ID",
        Showtime.subtitle_language: "Subtitles",
        Showtime.booking_reference: "Pretix event",
        Showtime.annotation: "Mark",
    }
    column_searchable_list = [Showtime.title, Showtime.film_external_id]
    column_sortable_list = [Showtime.screening_date, Showtime.start_time, Showtime.title]
    column_default_sort = [(Showtime.screening_date, False), (Showtime.start_time, False)]
    form_columns = [
        Showtime.screening_date,
        Showtime.film_external_id,
        Showtime.start_time,
        Showtime.end_time,
        Showtime.language,
        Showtime.subtitle_language,
        Showtime.booking_reference,
        Showtime.title,
        Showtime.sold_out,
        Showtime.annotation,
    ]


_TOOLS_TEMPLATE = """\
{% extends "sqladmin/layout.html" %}
{% block content %}
<div class="container-fluid p-4">
  <h2>Import programme</h2>
  <form method="post" enctype="multipart/form-data" class="mt-3 d-flex align-items-center gap-2 flex-wrap">
    <input type="file" name="workbook" accept=".xlsx" class="form-control" style="width:auto">
    <button name="action" value="preview" class="btn btn-primary">Preview</button>
  </form>

  {% if errors %}
  <div class="alert alert-danger mt-3">
    <ul class="mb-0">{% for e in errors %}<li>{{ e }}</li>{% endfor %}</ul>
  </div>
  {% endif %}

  {% if preview %}
  <table class="table table-sm table-bordered mt-3">
    <thead><tr><th>Date</th><th>Start</th><th>End</th><th>Title</th><th>TMDb</th><th>Language</th><th>Subtitles</th></tr></thead>
    <tbody>
    {% for s in preview %}
      <tr>
        <td>{{ s.screening_date }}</td><td>{{ s.start_time.strftime('%H:%M') }}</td>
        <td>{{ s.end_time.strftime('%H:%M') }}</td><td>{{ s.title }}</td>
        <td>{{ s.film_external_id }}</td><td>{{ s.language }}</td><td>{{ s.subtitle_language or '' }}</td>
      </tr>
    {% endfor %}
    </tbody>
  </table>
  <form method="post">
    <input type="hidden" name="rows" value="{{ rows_json }}">
    <button name="action" value="confirm" class="btn btn-success">Import {{ preview|length }} showtimes</button>
  </form>
  {% endif %}

  <hr class="my-4">

  <h2>Clean up</h2>
  <form method="post" class="mt-3 d-flex align-items-center gap-2 flex-wrap"
        onsubmit="return confirm('Are you sure?');">
    <button name="action" value="delete_past" class="btn btn-warning">Delete past showtimes</button>
    <button name="action" value="delete_all" class="btn btn-danger">Delete all showtimes</button>
  </form>

  {% if message %}
  <div class="alert alert-success mt-3">{{ message }}</div>
  {% endif %}
</div>
{% endblock %}
"""


class CatalogToolsView(BaseView):
    name = "Tools"
    icon = "fa-wrench"

    @expose("/tools", methods=["GET", "POST"])
    async def tools(self, request: Request) -> HTMLResponse:
        message: str | None = None
        errors: list[str] = []
        preview: list[ShowtimeCreate] = []

        if request.method == "POST":
            form = await request.form()
            action = form.get("action")

            if action == "preview":
                upload = form.get("workbook")
                if not isinstance(upload, UploadFile) or not upload.filename:
                    errors = ["Choose a .xlsx file to import."]
                else:
                    try:
                        preview = parse_workbook(await upload.read())
                    except ImportValidationError as e:
                        errors = e.errors

            elif action == "confirm":
                try:
                    rows = _PREVIEW_ADAPTER.validate_json(str(form.get("rows") or "[]"))
                except ValidationError as e:
                    errors = [f"Preview data was invalid: {e.error_count()} error(s)"]
                else:
                    async with AsyncSessionLocal() as db:
                        await ShowtimeCatalog(db).bulk_create(rows)
                        await db.commit()
                    message = f"Imported {len(rows)} showtimes."

            elif action == "delete_past":
                async with AsyncSessionLocal() as db:
                    deleted = await ShowtimeCatalog(db).delete_past(local_now())
                    await db.commit()
                message = f"Deleted {deleted} past showtimes."

            elif action == "delete_all":
                async with AsyncSessionLocal() as db:
                    deleted = await ShowtimeCatalog(db).delete_all()
                    await db.commit()
                message = f"Deleted all {deleted} showtimes."

        tmpl = self.templates.env.from_string(_TOOLS_TEMPLATE)
        content = await tmpl.render_async(
            request=request,
            message=message,
            errors=errors,
            preview=preview,
            rows_json=_PREVIEW_ADAPTER.dump_json(preview).decode() if preview else "",
        )
        return HTMLResponse(content)

"""
FastAPI routes for the gantt-timeline dashboard.

PURPOSE: Thin route handlers that delegate to presenters.
AI CONTEXT: Routes parse query/body input; all chart logic lives in the core.

ROUTE STRUCTURE:
- / : Main dashboard page (full HTML)
- /partials/labels : htmx partial update of the label table
- /charts/gantt.png : PNG chart image
- /api/* : JSON endpoints for programmatic access

ERROR MAPPING:
- GanttError (bad style, color mode, sort or domain) -> 400
- Unknown label -> 404
"""

from __future__ import annotations

import html
from collections.abc import Sequence
from typing import Annotated, Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel, Field, field_validator

from ..config import Config, EncodingConfig
from ..dataview import build_data_view
from ..encoding import encode_visuals
from ..errors import GanttError
from ..models import DomainConfig, Record, default_date_accessor
from ..presenters import ChartPresenter, GanttPresenter, GanttViewModel, LabelRowViewModel
from ..sorting import strategy_names
from ..storage import RecordStore

__all__ = [
    "router",
    "get_store",
    "get_gantt_presenter",
    "get_chart_presenter",
    "RecordIn",
    "VisualsRequest",
]

router = APIRouter()

DateValue = int | float | str

_DASHBOARD_CSS = """
:root {
    --bg: #0f172a;
    --panel: #1e293b;
    --border: #334155;
    --text: #e2e8f0;
    --text-muted: #94a3b8;
    --accent: #38bdf8;
}
* { box-sizing: border-box; }
body {
    margin: 0;
    font-family: system-ui, -apple-system, sans-serif;
    background: var(--bg);
    color: var(--text);
}
.container { max-width: 1200px; margin: 0 auto; padding: 1.5rem; }
header { display: flex; justify-content: space-between; align-items: center; }
h1 { font-size: 1.5rem; margin: 0; }
h2 { font-size: 1.1rem; margin: 0 0 0.75rem 0; }
.panel {
    background: var(--panel);
    border: 1px solid var(--border);
    border-radius: 8px;
    padding: 1rem;
    margin-top: 1rem;
}
.controls a {
    color: var(--accent);
    margin-right: 0.75rem;
    text-decoration: none;
}
.controls a.active { font-weight: 700; text-decoration: underline; }
.chart-container img { max-width: 100%; background: #fff; border-radius: 4px; }
table { width: 100%; border-collapse: collapse; font-size: 0.875rem; }
th, td { text-align: left; padding: 0.4rem 0.6rem; border-bottom: 1px solid var(--border); }
th { color: var(--text-muted); font-weight: 500; }
td.muted { color: var(--text-muted); text-align: center; }
footer {
    margin-top: 2rem;
    padding-top: 1rem;
    border-top: 1px solid var(--border);
    color: var(--text-muted);
    font-size: 0.875rem;
    text-align: center;
}
"""

# =============================================================================
# Request Bodies
# =============================================================================


class RecordIn(BaseModel):
    """One record of an ad-hoc POST body."""

    label: str
    date: DateValue
    value: float

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: DateValue) -> DateValue:
        """Reject strings that are neither numeric nor ISO 8601."""
        default_date_accessor(v)
        return v


class VisualsRequest(BaseModel):
    """Ad-hoc encoding request: records plus optional domain and settings."""

    records: list[RecordIn] = Field(default_factory=list)
    labels: list[str] | None = None
    dates: list[DateValue] | None = None
    style: str = Config.DEFAULT_STYLE
    color_mode: str = Config.DEFAULT_COLOR_MODE
    sort: str | None = None
    show_labels: bool = True

    @field_validator("dates")
    @classmethod
    def validate_dates(cls, v: list[DateValue] | None) -> list[DateValue] | None:
        for value in v or ():
            default_date_accessor(value)
        return v


# =============================================================================
# Dependency Factory Functions
# =============================================================================


def get_store() -> RecordStore:
    """
    Create a RecordStore for the configured data directory.

    A new store per request guarantees fresh file reads.

    Returns:
        RecordStore on Config.get_data_dir().
    """
    return RecordStore()


def get_gantt_presenter() -> GanttPresenter:
    """Create a GanttPresenter backed by get_store()."""
    return GanttPresenter(get_store())


def get_chart_presenter() -> ChartPresenter:
    """
    Create a ChartPresenter for server-side PNG rendering.

    Business context: Server-side rendering keeps the chart identical in
    the dashboard, in the CLI render command and in exported reports.

    Returns:
        ChartPresenter wrapping a fresh GanttPresenter.
    """
    return ChartPresenter(get_gantt_presenter())


def _encoding_config(style: str, color_mode: str, show_labels: bool = True) -> EncodingConfig:
    try:
        return EncodingConfig(style=style, color_mode=color_mode, labels=show_labels)
    except GanttError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _bad_request(error: GanttError) -> HTTPException:
    return HTTPException(status_code=400, detail=str(error))


# ============================================================================
# Full Page Routes
# ============================================================================


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(
    presenter: Annotated[GanttPresenter, Depends(get_gantt_presenter)],
    style: str = Config.DEFAULT_STYLE,
    color_mode: str = Config.DEFAULT_COLOR_MODE,
    sort: str | None = None,
) -> HTMLResponse:
    """
    Render the main dashboard page.

    Shows the rendered chart, style/color/sort switches and the label
    table. The chart image and the table refresh through htmx.

    Business context: The dashboard is the quickest way to eyeball which
    labels are active when, without writing any code against the API.

    Args:
        presenter: GanttPresenter injected via FastAPI Depends.
        style: Encoding style query parameter.
        color_mode: Color mode query parameter.
        sort: Sort strategy query parameter.

    Returns:
        HTMLResponse with the complete dashboard page.

    Raises:
        HTTPException: 400 for an invalid style, color mode or sort.
    """
    config = _encoding_config(style, color_mode)
    try:
        chart = presenter.get_chart(config, sort)
    except GanttError as e:
        raise _bad_request(e) from e
    page = _render_dashboard_html(chart, style=style, color_mode=color_mode, sort=sort)
    return HTMLResponse(content=page, media_type="text/html; charset=utf-8")


# ============================================================================
# Partial Routes (htmx)
# ============================================================================


@router.get("/partials/labels", response_class=HTMLResponse)
async def labels_partial(
    presenter: Annotated[GanttPresenter, Depends(get_gantt_presenter)],
    sort: str | None = None,
) -> HTMLResponse:
    """
    Render the label table HTML fragment for htmx partial updates.

    Args:
        presenter: GanttPresenter injected via FastAPI Depends.
        sort: Sort strategy query parameter.

    Returns:
        HTMLResponse containing only the table element.
    """
    try:
        rows = presenter.get_rows(sort)
    except GanttError as e:
        raise _bad_request(e) from e
    return HTMLResponse(content=_render_labels_table(rows))


# ============================================================================
# Chart Routes (PNG images)
# ============================================================================


@router.get("/charts/gantt.png")
async def gantt_chart(
    presenter: Annotated[ChartPresenter, Depends(get_chart_presenter)],
    style: str = Config.DEFAULT_STYLE,
    color_mode: str = Config.DEFAULT_COLOR_MODE,
    sort: str | None = None,
) -> Response:
    """
    Generate and serve the gantt chart as a PNG image.

    Falls back to an SVG placeholder if matplotlib is not installed.

    Returns:
        Response with either:
        - PNG image bytes (media_type="image/png") when matplotlib available
        - SVG placeholder (media_type="image/svg+xml") as fallback

    Raises:
        HTTPException: 400 for an invalid style, color mode or sort.
    """
    config = _encoding_config(style, color_mode)
    try:
        png_bytes = presenter.render_gantt_chart(config, sort)
        return Response(content=png_bytes, media_type="image/png")
    except ImportError:
        return Response(
            content=_placeholder_chart_svg("Gantt"),
            media_type="image/svg+xml",
        )
    except GanttError as e:
        raise _bad_request(e) from e


# ============================================================================
# API Routes (JSON)
# ============================================================================


@router.get("/api/dataview")
async def api_dataview(
    presenter: Annotated[GanttPresenter, Depends(get_gantt_presenter)],
    sort: str | None = None,
) -> dict[str, Any]:
    """
    Get the data view of the stored records as JSON.

    Returns:
        DataView.to_dict(): domain, ordered label series and global_max.

    Raises:
        HTTPException: 400 for an unknown sort or an empty date domain.
    """
    try:
        return presenter.load_data_view(sort).to_dict()
    except GanttError as e:
        raise _bad_request(e) from e


@router.get("/api/visuals")
async def api_visuals(
    presenter: Annotated[GanttPresenter, Depends(get_gantt_presenter)],
    style: str = Config.DEFAULT_STYLE,
    color_mode: str = Config.DEFAULT_COLOR_MODE,
    sort: str | None = None,
    show_labels: Annotated[bool, Query(alias="labels")] = True,
) -> dict[str, Any]:
    """
    Get the visual model of the stored records as JSON.

    Business context: Lets a browser-side renderer (SVG, canvas) draw
    the chart from precomputed cells or gradient stops.

    Returns:
        FractionModel.to_dict() or GradientModel.to_dict().

    Raises:
        HTTPException: 400 for an invalid style, color mode or sort.
    """
    config = _encoding_config(style, color_mode, show_labels)
    try:
        return presenter.get_chart(config, sort).visual.to_dict()
    except GanttError as e:
        raise _bad_request(e) from e


@router.post("/api/visuals")
async def api_visuals_adhoc(request: VisualsRequest) -> dict[str, Any]:
    """
    Encode records supplied in the request body, without touching the store.

    Returns:
        Visual model JSON plus the underlying data view.

    Raises:
        HTTPException: 400 for an invalid style, color mode, sort or domain.
    """
    config = _encoding_config(request.style, request.color_mode, request.show_labels)
    records = [Record(label=r.label, date=r.date, value=r.value) for r in request.records]
    domain = DomainConfig(
        dates=tuple(request.dates) if request.dates is not None else None,
        labels=tuple(request.labels) if request.labels is not None else None,
    )
    try:
        view = build_data_view(records, domain, request.sort)
        visual = encode_visuals(view, config)
    except GanttError as e:
        raise _bad_request(e) from e
    return {"visual": visual.to_dict(), "dataview": view.to_dict()}


@router.get("/api/labels/{label}/summary")
async def api_label_summary(
    label: str,
    presenter: Annotated[GanttPresenter, Depends(get_gantt_presenter)],
) -> dict[str, Any]:
    """
    Get the digest of one label.

    Returns:
        LabelDigest.to_dict() plus "html", the tooltip text joined with <br/>.

    Raises:
        HTTPException: 404 if the label is not in the domain.
    """
    try:
        digest = presenter.get_summary(label)
    except GanttError as e:
        raise _bad_request(e) from e
    if digest is None:
        raise HTTPException(status_code=404, detail=f"Unknown label '{label}'")
    return {**digest.to_dict(), "html": html.escape(digest.as_text("\n")).replace("\n", "<br/>")}


# ============================================================================
# Template Rendering Helpers
# ============================================================================


def _placeholder_chart_svg(title: str) -> bytes:
    """
    Generate a placeholder SVG when matplotlib is unavailable.

    Args:
        title: Chart title to display in the placeholder.

    Returns:
        UTF-8 encoded SVG with the text "{title} Chart (install matplotlib)".

    Example:
        >>> b'Gantt Chart' in _placeholder_chart_svg('Gantt')
        True
    """
    svg = f"""<svg xmlns="http://www.w3.org/2000/svg" width="400" height="200">
        <rect width="100%" height="100%" fill="#f1f5f9"/>
        <text x="50%" y="50%" text-anchor="middle" fill="#64748b" font-size="16">
            {title} Chart (install matplotlib)
        </text>
    </svg>"""
    return svg.encode("utf-8")


def _switch_links(
    name: str,
    options: Sequence[str | None],
    current: str | None,
    params: dict[str, str | None],
) -> str:
    links = []
    for option in options:
        query = {k: v for k, v in {**params, name: option}.items() if v is not None}
        css = ' class="active"' if option == current else ""
        text = html.escape(option or "default")
        links.append(f'<a href="/?{urlencode(query)}"{css}>{text}</a>')
    return " ".join(links)


def _render_dashboard_html(
    chart: GanttViewModel,
    style: str,
    color_mode: str,
    sort: str | None,
) -> str:
    """
    Render the complete dashboard HTML page.

    Args:
        chart: GanttViewModel for the current settings.
        style: Active style, for the chart URL and switch highlighting.
        color_mode: Active color mode.
        sort: Active sort strategy.

    Returns:
        Complete HTML document with embedded CSS and htmx.
    """
    params: dict[str, str | None] = {"style": style, "color_mode": color_mode, "sort": sort}
    chart_query = urlencode({k: v for k, v in params.items() if v is not None})
    labels_query = urlencode({"sort": sort}) if sort else ""

    style_links = _switch_links("style", sorted(Config.STYLES), style, params)
    color_links = _switch_links("color_mode", sorted(Config.COLOR_MODES), color_mode, params)
    sort_links = _switch_links("sort", [None, *strategy_names()], sort, params)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Gantt Timeline - Dashboard</title>
    <script src="https://unpkg.com/htmx.org@1.9.10"></script>
    <style>
        {_DASHBOARD_CSS}
    </style>
</head>
<body>
    <div class="container">
        <header>
            <h1>Gantt Timeline</h1>
            <span>{len(chart.rows)} labels &bull; {len(chart.visual.dates)} dates
                &bull; max {chart.max_display}</span>
        </header>

        <div class="panel controls">
            <div>Style: {style_links}</div>
            <div>Color: {color_links}</div>
            <div>Sort: {sort_links}</div>
        </div>

        <div class="panel" id="chart-panel">
            <h2>Timeline</h2>
            <div class="chart-container">
                <img src="/charts/gantt.png?{chart_query}" alt="Gantt Chart">
            </div>
        </div>

        <div class="panel" id="labels-panel"
             hx-get="/partials/labels?{labels_query}"
             hx-trigger="every 30s"
             hx-swap="innerHTML">
            <h2>Labels</h2>
            {_render_labels_table(chart.rows)}
        </div>

        <footer>
            Gantt Timeline &bull; Powered by FastAPI + htmx
        </footer>
    </div>
</body>
</html>"""


def _render_labels_table(rows: Sequence[LabelRowViewModel]) -> str:
    """
    Render label rows as an HTML table.

    Args:
        rows: Label rows in display order.

    Returns:
        HTML table; a placeholder row when there are no labels.
    """
    body = ""
    for row in rows:
        body += f"""<tr>
            <td>{html.escape(row.label)}</td>
            <td>{html.escape(row.date_range_display)}</td>
            <td>{row.duration + 1 if not row.is_empty else 0}</td>
            <td>{row.sum_display}</td>
            <td>{row.point_count}</td>
        </tr>"""

    if not body:
        body = '<tr><td colspan="5" class="muted">No records yet</td></tr>'

    return f"""<table>
        <thead>
            <tr>
                <th>Label</th>
                <th>Active</th>
                <th>Span</th>
                <th>Sum</th>
                <th>Points</th>
            </tr>
        </thead>
        <tbody>
            {body}
        </tbody>
    </table>"""

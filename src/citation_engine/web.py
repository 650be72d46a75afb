"""FastAPI + Tailwind interface for the citation engine.

Run with:
    uvicorn citation_engine.web:app --reload
"""
from __future__ import annotations

from html import escape
from typing import Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .app import CitationEngine
from .locales import STYLE_LABELS
from .models import CitationInput, CitationName, CitationSourceType, CitationStyle
from .names import parse_authors
from .report import render_format_report, render_parse_report

app = FastAPI(title="Citation Engine", description="Format and parse citations from the browser")

_engines: Dict[str, CitationEngine] = {}


def _engine(locale: str = "en") -> CitationEngine:
    try:
        if locale not in _engines:
            _engines[locale] = CitationEngine(locale=locale)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _engines[locale]


class AuthorModel(BaseModel):
    given: str = ""
    family: str = ""


class FormatRequest(BaseModel):
    style: CitationStyle = CitationStyle.APA7
    source_type: CitationSourceType = CitationSourceType.WEBSITE
    authors: List[AuthorModel] = Field(default_factory=list)
    title: str = ""
    container_title: str = ""
    publisher: str = ""
    published_date: str = ""
    access_date: str = ""
    volume: str = ""
    issue: str = ""
    pages: str = ""
    url: str = ""
    doi: str = ""
    locale: str = "en"

    def to_input(self) -> CitationInput:
        data = self.model_dump(exclude={"authors", "locale"})
        return CitationInput(
            authors=[CitationName(given=a.given, family=a.family) for a in self.authors],
            **data,
        )


class FormatResponse(BaseModel):
    citation: str
    warnings: List[str]


class ParseRequest(BaseModel):
    text: str
    style: Optional[CitationStyle] = None


class ParseResponse(BaseModel):
    style: str
    confidence: float
    source_type: Optional[str] = None
    authors_raw: Optional[str] = None
    title: Optional[str] = None
    container_title: Optional[str] = None
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    access_date: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    url: Optional[str] = None
    doi: Optional[str] = None


class DetectRequest(BaseModel):
    text: str


class DetectResponse(BaseModel):
    style: str
    confidence: float
    scores: Dict[str, float] = Field(default_factory=dict)


def _layout(content: str) -> str:
    """Wrap provided content in a Tailwind-powered HTML page."""

    return f"""
    <!doctype html>
    <html lang=\"en\" class=\"h-full bg-gray-50\">
    <head>
        <meta charset=\"utf-8\" />
        <title>Citation Engine</title>
        <link href=\"https://cdn.jsdelivr.net/npm/tailwindcss@3.4.4/dist/tailwind.min.css\" rel=\"stylesheet\" />
    </head>
    <body class=\"min-h-full py-10\">
        <div class=\"max-w-5xl mx-auto px-4\">
            <div class=\"bg-white shadow rounded-lg p-6\">
                <h1 class=\"text-3xl font-semibold text-gray-900\">Citation Engine</h1>
                <p class=\"text-gray-600 mt-2\">Paste a citation to detect its style and extract fields, or fill in the fields to render a citation.</p>
                {content}
            </div>
        </div>
    </body>
    </html>
    """


def _style_options(selected: str = "") -> str:
    return "".join(
        f"<option value=\"{style.value}\" {'selected' if style.value == selected else ''}>{label}</option>"
        for style, label in STYLE_LABELS.items()
    )


def _input(name: str, label: str) -> str:
    return f"""
        <label class=\"block text-sm font-medium text-gray-700 mt-2\" for=\"{name}\">{label}</label>
        <input type=\"text\" id=\"{name}\" name=\"{name}\" class=\"w-full border border-gray-300 rounded-md p-2 text-sm\" />
    """


def _form_page(result_title: str | None = None, result: str | None = None) -> str:
    """Render the landing page with optional result output."""

    parse_form = f"""
    <form action=\"/parse\" method=\"post\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <h2 class=\"text-xl font-semibold text-gray-800\">Parse a Citation</h2>
        <p class=\"text-gray-600 text-sm mb-3\">The style is detected automatically unless one is chosen.</p>
        <textarea name=\"text\" required placeholder=\"Paste one citation...\" class=\"w-full h-28 border border-gray-300 rounded-md p-3 text-sm\"></textarea>
        <label class=\"block text-sm font-medium text-gray-700 mt-2\" for=\"parse_style\">Style</label>
        <select id=\"parse_style\" name=\"style\" class=\"border border-gray-300 rounded-md p-2 text-sm\"><option value=\"\">Detect</option>{_style_options()}</select>
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Parse</button>
    </form>
    """

    fields = "".join(
        _input(name, label)
        for name, label in (
            ("authors", "Authors (one per line or separated by ;)"),
            ("title", "Title"),
            ("container_title", "Journal / website"),
            ("publisher", "Publisher"),
            ("published_date", "Published (YYYY-MM-DD)"),
            ("access_date", "Accessed (YYYY-MM-DD)"),
            ("volume", "Volume"),
            ("issue", "Issue"),
            ("pages", "Pages"),
            ("url", "URL"),
            ("doi", "DOI"),
        )
    )
    source_types = "".join(f"<option value=\"{t.value}\">{t.value}</option>" for t in CitationSourceType)
    format_form = f"""
    <form action=\"/format\" method=\"post\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <h2 class=\"text-xl font-semibold text-gray-800\">Format a Citation</h2>
        <div class=\"flex gap-4\">
            <select name=\"style\" class=\"border border-gray-300 rounded-md p-2 text-sm\">{_style_options(CitationStyle.APA7.value)}</select>
            <select name=\"source_type\" class=\"border border-gray-300 rounded-md p-2 text-sm\">{source_types}</select>
        </div>
        {fields}
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Format</button>
    </form>
    """

    result_block = ""
    if result:
        result_block = f"""
        <div class=\"mt-8\">
            <h2 class=\"text-xl font-semibold text-gray-800\">{escape(result_title or "Result")}</h2>
            <pre class=\"mt-3 bg-gray-900 text-green-100 p-4 rounded-lg whitespace-pre-wrap text-sm\">{escape(result)}</pre>
        </div>
        """

    return _layout(parse_form + format_form + result_block)


def _style_from_form(value: str) -> CitationStyle:
    try:
        return CitationStyle.from_string(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Serve the parse and format forms."""

    return HTMLResponse(_form_page())


@app.post("/format", response_class=HTMLResponse)
async def format_form(
    style: str = Form("apa7"),
    source_type: str = Form("website"),
    authors: str = Form(""),
    title: str = Form(""),
    container_title: str = Form(""),
    publisher: str = Form(""),
    published_date: str = Form(""),
    access_date: str = Form(""),
    volume: str = Form(""),
    issue: str = Form(""),
    pages: str = Form(""),
    url: str = Form(""),
    doi: str = Form(""),
) -> HTMLResponse:
    """Render a citation from submitted form fields."""

    try:
        kind = CitationSourceType(source_type)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Unknown source type: {source_type}") from exc

    entry = CitationInput(
        style=_style_from_form(style),
        source_type=kind,
        authors=parse_authors(authors),
        title=title,
        container_title=container_title,
        publisher=publisher,
        published_date=published_date,
        access_date=access_date,
        volume=volume,
        issue=issue,
        pages=pages,
        url=url,
        doi=doi,
    )
    result = _engine().format(entry)
    return HTMLResponse(_form_page("Formatted Citation", render_format_report([result])))


@app.post("/parse", response_class=HTMLResponse)
async def parse_form(text: str = Form(...), style: str = Form("")) -> HTMLResponse:
    """Detect and extract fields from pasted citation text."""

    preferred = _style_from_form(style) if style else None
    fields = _engine().parse(text, preferred)
    return HTMLResponse(_form_page("Parsed Fields", render_parse_report(fields)))


@app.post("/api/format", response_model=FormatResponse)
async def api_format(payload: FormatRequest) -> FormatResponse:
    result = _engine(payload.locale).format(payload.to_input())
    return FormatResponse(
        citation=result.citation,
        warnings=[code.value for code in result.sorted_warnings()],
    )


@app.post("/api/parse", response_model=ParseResponse)
async def api_parse(payload: ParseRequest) -> ParseResponse:
    fields = _engine().parse(payload.text, payload.style)
    return ParseResponse(**fields.to_dict())


@app.post("/api/detect", response_model=DetectResponse)
async def api_detect(payload: DetectRequest) -> DetectResponse:
    detection = _engine().detect(payload.text)
    style = detection.style.value if isinstance(detection.style, CitationStyle) else detection.style
    return DetectResponse(style=style, confidence=detection.confidence, scores=detection.scores)


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    uvicorn.run("citation_engine.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main"]

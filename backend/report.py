"""PDF export of a stored SEO analysis.

The document is assembled by hand as PDF 1.4 objects: a cover page with the
category scores, then text pages with tags and recommendations.
"""

import textwrap
from datetime import datetime

from models import AnalysisRecord, Recommendation
from scoring import score_status

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
LINES_PER_PAGE = 42

# fill colors per score status and recommendation type
_STATUS_RGB = {
    "excellent": "0.13 0.77 0.37",
    "good": "0.92 0.70 0.03",
    "needs-work": "0.94 0.27 0.27",
}
_TYPE_LABEL = {"success": "OK", "warning": "WARNING", "error": "ERROR"}


def _escape_pdf_text(value: str) -> str:
    safe = value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    return safe.encode("latin-1", "replace").decode("latin-1")


_FONTS = {"F1": "Helvetica", "F2": "Helvetica-Bold", "F3": "Courier"}


class _PdfDocument:
    """Objects are numbered in the order they are added, starting at 1."""

    def __init__(self) -> None:
        self._objects: list[bytes] = []

    def add(self, payload: str | bytes) -> int:
        if isinstance(payload, str):
            payload = payload.encode("latin-1")
        self._objects.append(payload)
        return len(self._objects)

    def reserve(self) -> int:
        return self.add(b"null")

    def set(self, ref: int, payload: str) -> None:
        self._objects[ref - 1] = payload.encode("latin-1")

    def to_bytes(self, root: int) -> bytes:
        out = bytearray(b"%PDF-1.4\n")
        xref = [b"0000000000 65535 f \n"]
        for ref, payload in enumerate(self._objects, start=1):
            xref.append(b"%010d 00000 n \n" % len(out))
            out += b"%d 0 obj\n%s\nendobj\n" % (ref, payload)

        xref_start = len(out)
        size = len(self._objects) + 1
        out += b"xref\n0 %d\n" % size
        out += b"".join(xref)
        out += b"trailer\n<< /Size %d /Root %d 0 R >>\n" % (size, root)
        out += b"startxref\n%d\n%%%%EOF\n" % xref_start
        return bytes(out)


def _build_pdf(page_streams: list[bytes]) -> bytes:
    doc = _PdfDocument()
    catalog = doc.reserve()
    pages = doc.reserve()
    font_refs = " ".join(
        f"/{alias} {doc.add(f'<< /Type /Font /Subtype /Type1 /BaseFont /{name} >>')} 0 R"
        for alias, name in _FONTS.items()
    )

    kids: list[int] = []
    for stream in page_streams:
        content = doc.add(b"<< /Length %d >>\nstream\n%s\nendstream" % (len(stream), stream))
        kids.append(
            doc.add(
                f"<< /Type /Page /Parent {pages} 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
                f"/Resources << /Font << {font_refs} >> >> /Contents {content} 0 R >>"
            )
        )

    kid_refs = " ".join(f"{kid} 0 R" for kid in kids)
    doc.set(pages, f"<< /Type /Pages /Kids [{kid_refs}] /Count {len(kids)} >>")
    doc.set(catalog, f"<< /Type /Catalog /Pages {pages} 0 R >>")
    return doc.to_bytes(root=catalog)


def _text(font: str, size: int, rgb: str, x: int, y: int, value: str) -> list[str]:
    return ["BT", f"/{font} {size} Tf", f"{rgb} rg", f"{x} {y} Td", f"({_escape_pdf_text(value)}) Tj", "ET"]


def _build_cover_stream(record: AnalysisRecord, total_pages: int) -> bytes:
    scores = record.get("scores") or {}
    commands = [
        "q",
        "0.23 0.51 0.96 rg",
        f"0 {PAGE_HEIGHT - 100} {PAGE_WIDTH} 100 re f",
        "Q",
    ]
    commands += _text("F2", 26, "1 1 1", 42, 736, "SEO Analysis Report")
    commands += _text("F1", 13, "1 1 1", 42, 712, record.get("domain") or "")
    commands += _text("F2", 16, "0 0 0", 42, 640, "Website Information")
    commands += _text("F1", 11, "0.2 0.2 0.2", 42, 616, f"URL: {record.get('url', '')}")
    commands += _text("F1", 11, "0.2 0.2 0.2", 42, 598, f"Title: {record.get('title') or 'N/A'}")
    commands += _text("F1", 11, "0.2 0.2 0.2", 42, 580, f"Analyzed: {record.get('analyzed_at', '')}")
    commands += _text("F2", 16, "0 0 0", 42, 530, "SEO Score Overview")

    rows = [
        ("Overall Score", "overall"),
        ("Meta Tags", "meta"),
        ("Social Media", "social"),
        ("Technical", "technical"),
    ]
    y = 496
    for label, key in rows:
        value = int(scores.get(key, 0))
        status = score_status(value)
        commands += ["q", f"{_STATUS_RGB[status]} rg", f"42 {y - 4} 14 14 re f", "Q"]
        commands += _text("F2", 12, "0 0 0", 66, y, f"{label}: {value}/100")
        commands += _text("F1", 10, "0.45 0.45 0.45", 240, y, status)
        y -= 28

    commands += _text("F1", 9, "0.45 0.45 0.45", 42, 18, "Generated by SEO Meta Analyzer")
    commands += _text("F1", 9, "0.45 0.45 0.45", 500, 18, f"Page 1 of {total_pages}")
    return "\n".join(commands).encode("latin-1", "replace")


def _build_detail_page_stream(
    *, lines: list[str], domain: str, page_number: int, total_pages: int
) -> bytes:
    commands = [
        "q",
        "0.93 0.95 0.99 rg",
        "30 748 552 26 re f",
        "Q",
    ]
    commands += _text("F2", 12, "0.12 0.25 0.60", 40, 758, f"SEO Analysis - {domain}")
    commands += ["BT", "/F1 10 Tf", "0 0 0 rg", "40 730 Td", "14 TL"]
    for line in lines:
        # code lines are prefixed with a bar and set in Courier
        if line.startswith("| "):
            commands.extend(["/F3 9 Tf", f"({_escape_pdf_text(line)}) Tj", "T*", "/F1 10 Tf"])
        else:
            commands.append(f"({_escape_pdf_text(line)}) Tj")
            commands.append("T*")
    commands.append("ET")
    commands += _text("F1", 9, "0.45 0.45 0.45", 500, 18, f"Page {page_number} of {total_pages}")
    return "\n".join(commands).encode("latin-1", "replace")


def _wrap_lines(values: list[str], max_chars: int = 88) -> list[str]:
    out: list[str] = []
    for value in values:
        if not value:
            out.append("")
            continue
        if value.startswith("| "):
            # markup must survive byte for byte, so split without dropping spaces
            code = value[2:]
            width = max_chars - 2
            out.extend(f"| {code[i : i + width]}" for i in range(0, len(code), width))
            continue
        wrapped = textwrap.wrap(value, width=max_chars) or [value]
        out.extend(wrapped)
    return out


def _recommendation_lines(index: int, rec: Recommendation) -> list[str]:
    label = _TYPE_LABEL.get(rec.get("type", ""), str(rec.get("type", "")).upper())
    lines = [f"{index}. [{label}] {rec.get('title', '')}", f"   {rec.get('description', '')}"]
    code = rec.get("code")
    if code:
        lines.extend(f"| {code_line}" for code_line in code.splitlines())
    lines.append("")
    return lines


def build_analysis_pdf(record: AnalysisRecord) -> bytes:
    meta_tags = record.get("meta_tags") or {}
    og_tags = record.get("og_tags") or {}
    twitter_tags = record.get("twitter_tags") or {}

    detail_lines = ["Meta Tags Analysis", ""]
    title = meta_tags.get("title") or ""
    if title:
        detail_lines += ["Title Tag:", f"   {title}", f"   Length: {len(title)} characters (Optimal: 30-60)"]
    else:
        detail_lines.append("Title Tag: none found")
    description = meta_tags.get("description") or ""
    if description:
        detail_lines += [
            "Meta Description:",
            f"   {description}",
            f"   Length: {len(description)} characters (Optimal: 120-160)",
        ]
    else:
        detail_lines.append("Meta Description: none found")

    detail_lines.extend(["", "Open Graph Tags"])
    if og_tags:
        detail_lines.extend(f"   {prop}: {content}" for prop, content in og_tags.items())
    else:
        detail_lines.append("   none found")

    detail_lines.extend(["", "Twitter Card Tags"])
    if twitter_tags:
        detail_lines.extend(f"   {name}: {content}" for name, content in twitter_tags.items())
    else:
        detail_lines.append("   none found")

    detail_lines.extend(["", "Recommendations", ""])
    for idx, rec in enumerate(record.get("recommendations") or [], start=1):
        detail_lines.extend(_recommendation_lines(idx, rec))

    wrapped_lines = _wrap_lines(detail_lines)
    chunks = [wrapped_lines[i : i + LINES_PER_PAGE] for i in range(0, len(wrapped_lines), LINES_PER_PAGE)]
    if not chunks:
        chunks = [["No data available."]]

    total_pages = len(chunks) + 1
    domain = record.get("domain") or ""
    page_streams: list[bytes] = [_build_cover_stream(record, total_pages)]
    for index, chunk in enumerate(chunks, start=2):
        page_streams.append(
            _build_detail_page_stream(
                lines=chunk,
                domain=domain,
                page_number=index,
                total_pages=total_pages,
            )
        )

    return _build_pdf(page_streams)


def report_filename(record: AnalysisRecord) -> str:
    analyzed_at = record.get("analyzed_at") or ""
    try:
        day = datetime.fromisoformat(analyzed_at).date().isoformat()
    except ValueError:
        day = analyzed_at[:10] or "report"
    domain = (record.get("domain") or "site").replace("/", "-")
    return f"seo-analysis-{domain}-{day}.pdf"

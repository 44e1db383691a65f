import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import io
import logging
import qrcode
from datetime import datetime
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader

from envirosense_config import PROJECT_KNOWLEDGE
from env_indicators.parameters import get_parameter

logger = logging.getLogger(__name__)

COLOR_DEEP_NAVY = colors.HexColor("#0f172a")
COLOR_DANGER = colors.HexColor("#ef4444")
COLOR_SUCCESS = colors.HexColor("#10b981")
COLOR_MUTED = colors.HexColor("#64748b")


def _draw_wrapped_text(c, text, x, y, max_width, line_height):
    """Helper to manually wrap text within a specific width on the PDF."""
    if not text:
        return y - line_height
    words = str(text).split(' ')
    line = ""
    for word in words:
        if c.stringWidth(line + word + " ", "Helvetica", 8) < max_width:
            line += word + " "
        else:
            c.drawString(x, y, line)
            line = word + " "
            y -= line_height
    c.drawString(x, y, line)
    return y - line_height


def _draw_section_header(c, x, y, width, text):
    """Navy sub-header separating the report sections."""
    c.setFillColor(COLOR_DEEP_NAVY)
    c.roundRect(x, y, width - 80, 18, 4, fill=1, stroke=0)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 9)
    c.drawString(x + 10, y + 5, text.upper())
    return y - 10


def _render_series_chart(time_series, color, label):
    """Line chart of the monthly series with its uncertainty band, as PNG bytes."""
    dates = [p["date"] for p in time_series]
    values = np.array([p["value"] for p in time_series], dtype=float)
    x = np.arange(len(dates))

    fig = plt.figure(figsize=(7, 2.6), dpi=150)
    ax = fig.add_subplot(111)
    if time_series and all("min" in p and "max" in p for p in time_series):
        lows = np.array([p["min"] for p in time_series], dtype=float)
        highs = np.array([p["max"] for p in time_series], dtype=float)
        ax.fill_between(x, lows, highs, color=color, alpha=0.2, linewidth=0)
    ax.plot(x, values, color=color, linewidth=1.2)

    # one tick per year
    ticks = [i for i, d in enumerate(dates) if d.endswith("-01-01")]
    ax.set_xticks(ticks)
    ax.set_xticklabels([dates[i][:4] for i in ticks], fontsize=6)
    ax.tick_params(axis='y', labelsize=6)
    ax.set_ylabel(label, fontsize=7)
    ax.grid(alpha=0.3)
    fig.tight_layout()

    chart_io = io.BytesIO()
    plt.savefig(chart_io, format='png', transparent=True)
    plt.close(fig)
    chart_io.seek(0)
    return chart_io


def _draw_share_qr(c, share_url, width, height):
    qr = qrcode.QRCode(version=1, box_size=10, border=2)
    qr.add_data(share_url)
    qr.make(fit=True)
    qr_img = qr.make_image(fill_color="black", back_color="white")

    qr_buffer = io.BytesIO()
    qr_img.save(qr_buffer, format='PNG')
    qr_buffer.seek(0)

    c.setFillColor(colors.white)
    c.roundRect(width - 95, height - 90, 80, 80, 4, fill=1, stroke=0)
    c.drawImage(ImageReader(qr_buffer), width - 90, height - 82, width=70, height=70)
    c.linkURL(share_url, (width - 90, height - 82, width - 20, height - 12), relative=0)


def _pdf_text(text):
    # standard Type1 fonts have no subscript digits
    return str(text).replace("₂", "2")


def _format_stat(val):
    if isinstance(val, float) and val != 0 and (abs(val) >= 1e6 or abs(val) < 1e-3):
        return f"{val:.4e}"
    return str(val)


def generate_analysis_report(data):
    """
    One-page PDF for a computed analysis: header, series chart,
    statistics card and insights.
    """
    spec = get_parameter(data.get("parameter") or "")
    label = _pdf_text(spec.label if spec else data.get("parameter", "Parameter"))
    unit = spec.unit if spec else ""
    color = spec.palette[-1] if spec else "#06b6d4"

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    # 1. HEADER
    c.setFillColor(COLOR_DEEP_NAVY)
    c.rect(0, height - 100, width, 100, fill=1, stroke=0)
    share_url = data.get('shareLink')
    if share_url:
        try:
            _draw_share_qr(c, share_url, width, height)
        except Exception as e:
            logger.error(f"QR Generation Error: {e}")

    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 20)
    c.drawCentredString(width / 2, height - 40, f"{PROJECT_KNOWLEDGE['project_name']} – {label} Analysis")
    c.setFont("Helvetica-Bold", 11)
    c.drawCentredString(width / 2, height - 60, str(data.get('locationName') or PROJECT_KNOWLEDGE['country']).upper())

    loc = data.get('location') or {}
    timestamp = datetime.now().strftime('%d %b %Y | %H:%M:%S')
    position = f"LAT: {loc.get('lat')} | LON: {loc.get('lon')}" if loc else "NATION-WIDE AGGREGATE"
    c.setFont("Helvetica", 8)
    c.drawCentredString(width / 2, height - 80, f"{timestamp}  •  {position}")

    # 2. SERIES CHART
    time_series = data.get("timeSeries") or []
    y_chart = _draw_section_header(c, 40, height - 130, width, f"Section 01: Monthly {label} ({unit})")
    if time_series:
        chart = _render_series_chart(time_series, color, label)
        c.drawImage(ImageReader(chart), 40, y_chart - 190, width=width - 80, height=185, mask='auto')
    y_stats = y_chart - 215

    # 3. STATISTICS
    y_stats = _draw_section_header(c, 40, y_stats, width, "Section 02: Statistics")
    stats = data.get("stats") or {}
    c.setFillColor(colors.HexColor("#f8fafc"))
    c.roundRect(40, y_stats - 62, width - 80, 58, 6, fill=1, stroke=0)
    c.setFillColor(colors.black)
    c.setFont("Helvetica", 8)
    c.drawString(50, y_stats - 18, f"Mean: {_format_stat(stats.get('mean'))}   |   StdDev: {_format_stat(stats.get('stdDev'))}")
    c.drawString(50, y_stats - 32, f"Min: {_format_stat(stats.get('min'))}   |   Max: {_format_stat(stats.get('max'))}")
    trend = stats.get("trend")
    if trend:
        c.setFillColor(COLOR_SUCCESS if trend == "stable" else COLOR_DANGER)
        c.setFont("Helvetica-Bold", 9)
        c.drawString(50, y_stats - 48, f"Trend: {trend.upper()} ({stats.get('trendPercent', 0)}%)")

    # 4. INSIGHTS
    y_ins = _draw_section_header(c, 40, y_stats - 90, width, "Section 03: Insights")
    c.setFillColor(colors.black)
    c.setFont("Helvetica", 8)
    y_ins -= 8
    for insight in data.get("insights") or []:
        if y_ins < 60:
            break
        y_ins = _draw_wrapped_text(c, _pdf_text(f"• {insight}"), 50, y_ins, width - 110, 11)

    c.setFillColor(COLOR_MUTED)
    c.setFont("Helvetica-Oblique", 7)
    source = _pdf_text(data.get("source") or (spec.source if spec else "N/A"))
    c.drawString(40, 30, f"Source: {source}  •  Illustrative synthetic values, not measured data.")

    c.save()
    buffer.seek(0)
    return buffer

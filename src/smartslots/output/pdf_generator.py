"""PDF generation for recommendation output.

This module creates a printable PDF report showing:
- A day timeline with booked sessions and recommended slots
- The reasons behind each recommended slot
- Day tips and workload summary
"""

from io import BytesIO
from pathlib import Path
from typing import Union

from smartslots.domain.models import (
    Recommendations,
    SchedulingContext,
    SessionKind,
    SlotTier,
    TimePeriod,
)
from smartslots.domain.policies import DEFAULT_WORK_END, DEFAULT_WORK_START
from smartslots.domain.timeutils import minutes_to_time, time_to_minutes

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    SessionKind.IN_PERSON: (0.8, 0.5, 0.3),  # Orange
    SessionKind.REMOTE: (0.4, 0.5, 0.8),  # Blue
    SlotTier.GOLD: (0.95, 0.8, 0.3),  # Gold
    SlotTier.GREEN: (0.45, 0.75, 0.45),  # Green
    SlotTier.NEUTRAL: (0.75, 0.75, 0.75),  # Gray
    "background": (0.95, 0.95, 0.95),  # Light gray
}


def _pdf_text(text: str) -> str:
    """Drop characters the standard PDF fonts cannot draw (emoji, Arabic)."""
    return text.encode("latin-1", "ignore").decode("latin-1").strip()


class PDFGenerator:
    """Generates printable PDF recommendation reports.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(recommendations, context, stats, "slots.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        recommendations: Recommendations,
        context: SchedulingContext,
        stats: dict,
        output_path: Union[str, Path],
        include_summary: bool = True,
    ) -> None:
        """Generate PDF report and save to file.

        Args:
            recommendations: The engine output to render.
            context: The context the output was produced for.
            stats: Statistics from SlotRecommender.recommend_with_stats.
            output_path: Path to save the PDF.
            include_summary: Whether to include the summary page.
        """
        try:
            from reportlab.lib.pagesizes import landscape, letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        c = canvas.Canvas(str(output_path), pagesize=landscape(letter))
        self._draw_report(c, recommendations, context, stats, include_summary)
        c.save()

    def generate_to_buffer(
        self,
        recommendations: Recommendations,
        context: SchedulingContext,
        stats: dict,
        include_summary: bool = True,
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer.

        Returns:
            BytesIO buffer containing PDF data.
        """
        try:
            from reportlab.lib.pagesizes import landscape, letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=landscape(letter))
        self._draw_report(c, recommendations, context, stats, include_summary)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_report(
        self,
        c,
        recommendations: Recommendations,
        context: SchedulingContext,
        stats: dict,
        include_summary: bool,
    ) -> None:
        self._draw_timeline_page(c, recommendations, context, stats)
        if include_summary:
            self._draw_summary_page(c, recommendations, stats)

    def _window(self, stats: dict) -> tuple[int, int]:
        work_start = stats.get("work_start", time_to_minutes(DEFAULT_WORK_START))
        work_end = stats.get("work_end", time_to_minutes(DEFAULT_WORK_END))
        return work_start, max(work_end, work_start + 60)

    def _draw_timeline_page(
        self,
        c,
        recommendations: Recommendations,
        context: SchedulingContext,
        stats: dict,
    ) -> None:
        """Draw the day timeline with booked and recommended rows."""
        header_height = 60
        row_height = 24
        timeline_left = self.margin + 120  # Space for labels
        timeline_right = self.page_width - self.margin - 20
        timeline_width = timeline_right - timeline_left
        work_start, work_end = self._window(stats)

        self._draw_header(c, context, stats)

        axis_y = self.page_height - self.margin - header_height - 20
        self._draw_time_axis(c, work_start, work_end, timeline_left, axis_y, timeline_width)

        y = axis_y - 10
        y -= row_height
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 9)
        c.drawString(self.margin, y + row_height / 2 - 5, "Booked")
        self._draw_background(c, timeline_left, timeline_width, y, row_height - 4)
        for interval in stats.get("occupied", []):
            self._draw_block(
                c,
                interval.start,
                interval.end,
                COLORS[interval.session_kind],
                work_start,
                work_end,
                timeline_left,
                timeline_width,
                y,
                row_height - 4,
            )

        max_rows = int((y - self.margin - 40) / row_height)
        for rank, slot in enumerate(recommendations.slots[:max_rows], 1):
            y -= row_height
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica", 9)
            c.drawString(self.margin, y + row_height / 2 - 3, f"#{rank} {slot.time}")
            c.setFont("Helvetica", 7)
            c.drawString(self.margin, y + row_height / 2 - 11, f"score {slot.score}")

            self._draw_background(c, timeline_left, timeline_width, y, row_height - 4)
            self._draw_block(
                c,
                slot.start_minutes,
                slot.end_minutes,
                COLORS[slot.tier],
                work_start,
                work_end,
                timeline_left,
                timeline_width,
                y,
                row_height - 4,
            )

        self._draw_legend(c, self.margin, self.margin + 10)
        c.showPage()

    def _draw_header(self, c, context: SchedulingContext, stats: dict) -> None:
        """Draw page header with date and request."""
        target = stats.get("date") or context.target_date
        title = target.strftime("%A, %B %d, %Y") if target else "No date"

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Recommended Slots - {title}",
        )

        kind = context.new_session_kind.value if context.new_session_kind else "any"
        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"New session: {context.duration_minutes} min, {kind}. "
            f"Booked today: {stats.get('occupied_count', 0)}",
        )

    def _draw_time_axis(
        self,
        c,
        work_start: int,
        work_end: int,
        x: float,
        y: float,
        width: float,
    ) -> None:
        """Draw time axis with hour markers."""
        span = work_end - work_start
        c.setFont("Helvetica", 8)
        c.setStrokeColorRGB(0.7, 0.7, 0.7)
        c.setFillColorRGB(0, 0, 0)

        first_hour = -(-work_start // 60) * 60
        for minutes in range(first_hour, work_end + 1, 60):
            tick_x = x + (minutes - work_start) / span * width
            c.line(tick_x, y, tick_x, y - 5)
            c.drawCentredString(tick_x, y + 5, minutes_to_time(minutes)[:2])

    def _draw_background(self, c, x: float, width: float, y: float, height: float) -> None:
        c.setFillColorRGB(*COLORS["background"])
        c.rect(x, y, width, height, fill=1, stroke=0)

    def _draw_block(
        self,
        c,
        start: int,
        end: int,
        color: tuple,
        work_start: int,
        work_end: int,
        timeline_x: float,
        timeline_width: float,
        y: float,
        height: float,
    ) -> None:
        """Draw one interval clipped to the working window."""
        start = max(start, work_start)
        end = min(end, work_end)
        if end <= start:
            return
        span = work_end - work_start
        bx = timeline_x + (start - work_start) / span * timeline_width
        bw = (end - start) / span * timeline_width

        c.setFillColorRGB(*color)
        c.rect(bx, y, bw, height, fill=1, stroke=0)
        c.setStrokeColorRGB(0.3, 0.3, 0.3)
        c.setLineWidth(0.5)
        c.rect(bx, y, bw, height, fill=0, stroke=1)

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for colors."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 8)
        c.drawString(x, y, "Legend:")

        items = [
            (SessionKind.IN_PERSON, "In person"),
            (SessionKind.REMOTE, "Remote"),
            (SlotTier.GOLD, "Gold"),
            (SlotTier.GREEN, "Green"),
            (SlotTier.NEUTRAL, "Neutral"),
        ]

        c.setFont("Helvetica", 7)
        current_x = x + 45

        for key, label in items:
            c.setFillColorRGB(*COLORS[key])
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, label)
            current_x += 70

    def _draw_summary_page(
        self,
        c,
        recommendations: Recommendations,
        stats: dict,
    ) -> None:
        """Draw summary page with workload, tips and slot reasons."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(self.margin, self.page_height - self.margin - 20, "Summary")

        y = self.page_height - self.margin - 60

        workload = stats.get("workload")
        if workload is not None:
            c.setFont("Helvetica-Bold", 12)
            c.drawString(self.margin, y, "Workload")
            y -= 18
            c.setFont("Helvetica", 10)
            for period in TimePeriod:
                suffix = " (quietest)" if period == workload.quietest else ""
                c.drawString(
                    self.margin + 20,
                    y,
                    f"{period.value.capitalize()}: {workload.count_for(period)}{suffix}",
                )
                y -= 15
            y -= 10

        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Day Tips")
        y -= 18
        c.setFont("Helvetica", 10)
        for tip in recommendations.tips:
            c.drawString(self.margin + 20, y, f"[{tip.severity.value}] {_pdf_text(tip.text)}")
            y -= 15
        y -= 10

        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Why These Slots")
        y -= 18

        for slot in recommendations.slots:
            if y < self.margin + 30:
                c.showPage()
                y = self.page_height - self.margin - 20
            c.setFillColorRGB(*COLORS[slot.tier])
            c.rect(self.margin + 20, y - 2, 10, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica-Bold", 9)
            c.drawString(self.margin + 35, y, f"{slot.time}  score {slot.score}")
            c.setFont("Helvetica", 8)
            reasons = "; ".join(_pdf_text(r) for r in slot.reasons)
            c.drawString(self.margin + 130, y, reasons[:140])
            y -= 14

        c.showPage()

"""
PDF canvas backend built on ReportLab.
"""

# Standard Library
import io

# PIP3 modules
import PIL.Image
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import atml_renderer as atr
import atml_renderer.backend
import atml_renderer.config
import atml_renderer.measure


CanvasBackend = atr.backend.CanvasBackend

BASELINE_RATIO = atr.config.BASELINE_RATIO
BORDER_DASH_PATTERNS = atr.config.BORDER_DASH_PATTERNS
DEFAULT_FONT_SIZE = atr.config.DEFAULT_FONT_SIZE
LINE_HEIGHT_RATIO = atr.config.LINE_HEIGHT_RATIO


class ReportLabBackend(CanvasBackend):
	"""
	Draws onto an in-memory ReportLab canvas.

	Recognized options: compress (page stream compression), title, author,
	and subject (document metadata).
	"""

	name = "reportlab"

	def __init__(self, width, height, options=None, fonts=None) -> None:
		super().__init__(width, height, options, fonts)
		self.buffer = io.BytesIO()
		page_compression = 1 if self.options.get("compress") else 0
		self.pdf = reportlab.pdfgen.canvas.Canvas(
			self.buffer,
			pagesize=(self.width, self.height),
			pageCompression=page_compression,
		)
		if self.options.get("title"):
			self.pdf.setTitle(str(self.options["title"]))
		if self.options.get("author"):
			self.pdf.setAuthor(str(self.options["author"]))
		if self.options.get("subject"):
			self.pdf.setSubject(str(self.options["subject"]))
		self.font_name = self.fonts.resolve(atr.config.DEFAULT_FONT_FAMILY, False)
		self.font_size = DEFAULT_FONT_SIZE
		self.leading = DEFAULT_FONT_SIZE * LINE_HEIGHT_RATIO
		self.pending_paths: list = []
		self.data: bytes | None = None
		self.pdf.setFont(self.font_name, self.font_size)
		self.pdf.setFillColorRGB(0.0, 0.0, 0.0)

	def set_font(self, family: str, size: float, bold: bool = False) -> None:
		self.font_name = self.fonts.resolve(family, bold)
		self.font_size = size
		self.pdf.setFont(self.font_name, self.font_size)

	def set_line_leading(self, leading: float) -> None:
		self.leading = leading

	def text_wrap(self, top_left, box_size, text, align="left") -> None:
		"""
		Draw word-wrapped text from the top of a box downward.

		The first line always draws; later lines stop once their baseline
		falls below the bottom of the box.

		Args:
			top_left: Canvas (x, y) of the box's top-left corner.
			box_size: (width, height) of the box.
			text: Text run, may contain newlines.
			align: "left", "center", or "right".
		"""
		x, top = top_left
		width, height = box_size
		lines: list[str] = []
		for hard_line in atr.measure.split_hard_lines(text):
			lines.extend(
				atr.measure.wrap_text_to_width(hard_line, self.font_name, self.font_size, width)
			)
		baseline = top - self.font_size * BASELINE_RATIO
		bottom = top - height
		for index, line in enumerate(lines):
			text_y = baseline - index * self.leading
			if index > 0 and text_y < bottom:
				break
			if align == "center":
				self.pdf.drawCentredString(x + width / 2.0, text_y, line)
			elif align == "right":
				self.pdf.drawRightString(x + width, text_y, line)
			else:
				self.pdf.drawString(x, text_y, line)

	def add_image(self, image_ref, bottom_left, size) -> None:
		image = PIL.Image.open(image_ref)
		image.load()
		image_reader = reportlab.lib.utils.ImageReader(image)
		self.pdf.drawImage(
			image_reader,
			bottom_left[0],
			bottom_left[1],
			width=size[0],
			height=size[1],
			mask="auto",
			preserveAspectRatio=False,
			anchor="sw",
		)

	def set_stroke_color(self, rgb) -> None:
		self.pdf.setStrokeColorRGB(rgb[0], rgb[1], rgb[2])

	def set_line_width(self, width: float) -> None:
		self.pdf.setLineWidth(width)

	def line(self, start, end, style="solid") -> None:
		path = self.pdf.beginPath()
		path.moveTo(start[0], start[1])
		path.lineTo(end[0], end[1])
		self.pending_paths.append((path, BORDER_DASH_PATTERNS.get(style, [])))

	def stroke(self) -> None:
		for path, dash in self.pending_paths:
			self.pdf.setDash(dash, 0)
			self.pdf.drawPath(path, stroke=1, fill=0)
		self.pending_paths = []
		self.pdf.setDash([], 0)

	def export(self) -> bytes:
		if self.data is None:
			self.pdf.showPage()
			self.pdf.save()
			self.data = self.buffer.getvalue()
		return self.data

	def cleanup(self) -> None:
		self.pending_paths = []
		self.buffer.close()

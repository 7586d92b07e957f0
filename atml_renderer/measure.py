"""
Content size estimation.

Measurement is a strategy object so the layout code never hard-codes the
character-width model. HeuristicMeasure is the default approximation;
GlyphMetricsMeasure swaps in real font metrics from ReportLab.
"""

# Standard Library
import math

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import atml_renderer as atr
import atml_renderer.config
import atml_renderer.fonts
import atml_renderer.geometry


FontContext = atr.geometry.FontContext
FontRegistry = atr.fonts.FontRegistry

LINE_HEIGHT_RATIO = atr.config.LINE_HEIGHT_RATIO
HEIGHT_CHAR_WIDTH_FACTOR = atr.config.HEIGHT_CHAR_WIDTH_FACTOR
WIDTH_CHAR_WIDTH_FACTOR = atr.config.WIDTH_CHAR_WIDTH_FACTOR


#============================================
def split_hard_lines(text: str) -> list[str]:
	"""
	Split text on explicit newlines and trim each line.

	Args:
		text: Text run.

	Returns:
		Trimmed hard lines.
	"""
	return [line.strip() for line in text.split("\n")]


#============================================
def wrap_text_to_width(
	text: str,
	font_name: str,
	font_size: float,
	max_width: float,
) -> list[str]:
	"""
	Word-wrap one hard line to fit within a max width.

	A word wider than the line is kept whole on its own line.

	Args:
		text: Input text without newlines.
		font_name: Canvas font name for width calculation.
		font_size: Font size for width calculation.
		max_width: Maximum line width in points.

	Returns:
		Wrapped lines.
	"""
	words = text.split()
	if not words:
		return [text]
	lines: list[str] = []
	current = ""
	for word in words:
		candidate = word if not current else f"{current} {word}"
		width = reportlab.pdfbase.pdfmetrics.stringWidth(candidate, font_name, font_size)
		if width <= max_width or not current:
			current = candidate
			continue
		lines.append(current)
		current = word
	if current:
		lines.append(current)
	return lines


class HeuristicMeasure:
	"""
	Average-character-width text measurement.

	The height axis wraps with a narrower character estimate than the width
	axis uses for natural width, so fit-width columns err on the wide side.
	"""

	def __init__(
		self,
		height_char_factor: float = HEIGHT_CHAR_WIDTH_FACTOR,
		width_char_factor: float = WIDTH_CHAR_WIDTH_FACTOR,
		line_height_ratio: float = LINE_HEIGHT_RATIO,
	) -> None:
		self.height_char_factor = height_char_factor
		self.width_char_factor = width_char_factor
		self.line_height_ratio = line_height_ratio

	def line_height(self, font: FontContext) -> float:
		return font.size * self.line_height_ratio

	def chars_per_line(self, width: float, font: FontContext) -> int:
		"""
		Estimate how many characters fit on one line.

		Args:
			width: Available width in points.
			font: Effective font.

		Returns:
			Characters per line, at least 1.
		"""
		avg_char_width = font.size * self.height_char_factor
		if width <= 0 or avg_char_width <= 0:
			return 1
		return max(1, math.floor(width / avg_char_width))

	def line_count(self, text: str, width: float, font: FontContext) -> int:
		"""
		Count hard and soft lines for a text run.

		Args:
			text: Text run.
			width: Available width in points.
			font: Effective font.

		Returns:
			Total line count.
		"""
		per_line = self.chars_per_line(width, font)
		total = 0
		for line in split_hard_lines(text):
			total += math.ceil(max(len(line), 1) / per_line)
		return total

	def text_height(self, text: str, width: float, font: FontContext) -> float:
		"""
		Estimate the height a text run occupies when wrapped.

		Args:
			text: Text run.
			width: Available width in points.
			font: Effective font.

		Returns:
			Height in points.
		"""
		return self.line_count(text, width, font) * self.line_height(font)

	def text_width(self, text: str, font: FontContext) -> float:
		"""
		Estimate the natural (unwrapped) width of a text run.

		Args:
			text: Text run.
			font: Effective font.

		Returns:
			Width of the longest hard line in points.
		"""
		longest = max((len(line) for line in split_hard_lines(text)), default=0)
		return longest * font.size * self.width_char_factor


class GlyphMetricsMeasure(HeuristicMeasure):
	"""
	Measurement backed by ReportLab font metrics.
	"""

	def __init__(
		self,
		fonts: FontRegistry | None = None,
		line_height_ratio: float = LINE_HEIGHT_RATIO,
	) -> None:
		super().__init__(line_height_ratio=line_height_ratio)
		self.fonts = fonts or FontRegistry()

	def string_width(self, text: str, font: FontContext) -> float:
		font_name = self.fonts.resolve(font.family, font.bold)
		return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font.size)

	def line_count(self, text: str, width: float, font: FontContext) -> int:
		total = 0
		for line in split_hard_lines(text):
			total += max(1, len(self.wrap_line(line, width, font)))
		return total

	def wrap_line(self, line: str, width: float, font: FontContext) -> list[str]:
		font_name = self.fonts.resolve(font.family, font.bold)
		return wrap_text_to_width(line, font_name, font.size, width)

	def text_width(self, text: str, font: FontContext) -> float:
		widths = [self.string_width(line, font) for line in split_hard_lines(text)]
		return max(widths, default=0.0)


#============================================
def build_measure(name: "str | HeuristicMeasure | None", fonts: FontRegistry | None = None) -> HeuristicMeasure:
	"""
	Build a measurement strategy from a name.

	Args:
		name: "heuristic", "glyph", an existing strategy, or None.
		fonts: Font registry for glyph metrics.

	Returns:
		Measurement strategy.
	"""
	if isinstance(name, HeuristicMeasure):
		return name
	if name is None or name == "heuristic":
		return HeuristicMeasure()
	if name == "glyph":
		return GlyphMetricsMeasure(fonts)
	raise ValueError(f"Unknown measurement strategy: {name}")

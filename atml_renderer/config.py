"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses


PX_TO_PT = 0.75
LINE_HEIGHT_RATIO = 1.2
HEIGHT_CHAR_WIDTH_FACTOR = 0.5
WIDTH_CHAR_WIDTH_FACTOR = 0.6

DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_FONT_SIZE = 8.0
DEFAULT_FONT_WEIGHT = "normal"
FALLBACK_FONT_REGULAR = "Helvetica"
FALLBACK_FONT_BOLD = "Helvetica-Bold"
BUILTIN_FONT_ALIASES = {
	("helvetica", False): "Helvetica",
	("helvetica", True): "Helvetica-Bold",
	("times", False): "Times-Roman",
	("times", True): "Times-Bold",
	("times-roman", False): "Times-Roman",
	("times-roman", True): "Times-Bold",
	("courier", False): "Courier",
	("courier", True): "Courier-Bold",
}

DEFAULT_BACKEND = "reportlab"
DEFAULT_TEXT_ALIGN = "left"
DEFAULT_VERTICAL_ALIGN = "top"
TEXT_ALIGNS = ("left", "center", "right")
VERTICAL_ALIGNS = ("top", "center", "bottom")
FONT_WEIGHTS = ("normal", "bold")
BORDER_STYLES = ("solid", "dashed", "dotted")
BORDER_DASH_PATTERNS = {
	"solid": [],
	"dashed": [3, 2],
	"dotted": [1, 1],
}

BASELINE_RATIO = 0.8
TEMP_IMAGE_PREFIX = "atml_img_"
IMAGE_MIME_SUFFIXES = {
	"image/png": ".png",
	"image/jpeg": ".jpg",
	"image/jpg": ".jpg",
	"image/gif": ".gif",
	"image/bmp": ".bmp",
}


@dataclasses.dataclass
class RenderOptions:
	backend: object = DEFAULT_BACKEND
	compress: bool = False
	fonts: object = None
	measure: str = "heuristic"
	verbose: bool = False
	backend_options: dict = dataclasses.field(default_factory=dict)


#============================================
def px_to_points(value: float) -> float:
	"""
	Convert CSS pixels to points.

	Args:
		value: Pixel value.

	Returns:
		Points value.
	"""
	return value * PX_TO_PT


#============================================
def build_render_options(options: "RenderOptions | dict | None") -> RenderOptions:
	"""
	Normalize caller options into a RenderOptions record.

	Known keys fill the matching fields; anything else is kept in
	backend_options and handed to the backend untouched.

	Args:
		options: RenderOptions, mapping, or None.

	Returns:
		RenderOptions.
	"""
	if options is None:
		return RenderOptions()
	if isinstance(options, RenderOptions):
		return options
	known = {field.name for field in dataclasses.fields(RenderOptions)}
	values: dict = {}
	extra: dict = {}
	for key, value in dict(options).items():
		if key == "backend_options":
			extra.update(value or {})
		elif key in known:
			values[key] = value
		else:
			extra[key] = value
	return RenderOptions(backend_options=extra, **values)

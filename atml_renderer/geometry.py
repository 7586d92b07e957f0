"""
Geometry model for template boxes.

Dimensions, spacing, borders, and fonts are plain value records. The box
nodes form a strict alternating tree: a Document holds Rows, a Row holds
Cols, and a Col holds text runs (plain strings), Imgs, and nested Rows.

The same node classes describe both the parsed tree and the resolved
tree. After layout every width/height slot holds a float in points, the
min/max slots are None, and every Col.font is a complete FontContext.
"""

# Standard Library
import dataclasses

# local repo modules
import atml_renderer as atr
import atml_renderer.config


DEFAULT_FONT_FAMILY = atr.config.DEFAULT_FONT_FAMILY
DEFAULT_FONT_SIZE = atr.config.DEFAULT_FONT_SIZE
DEFAULT_FONT_WEIGHT = atr.config.DEFAULT_FONT_WEIGHT
DEFAULT_TEXT_ALIGN = atr.config.DEFAULT_TEXT_ALIGN
DEFAULT_VERTICAL_ALIGN = atr.config.DEFAULT_VERTICAL_ALIGN

FIXED = "fixed"
PERCENT = "percent"
FILL = "fill"
FIT = "fit"


@dataclasses.dataclass(frozen=True)
class Dimension:
	kind: str
	value: float = 0.0

	@classmethod
	def fixed(cls, points: float) -> "Dimension":
		return cls(FIXED, float(points))

	@classmethod
	def percent(cls, pct: float) -> "Dimension":
		return cls(PERCENT, float(pct))

	@classmethod
	def fill(cls) -> "Dimension":
		return cls(FILL)

	@classmethod
	def fit(cls) -> "Dimension":
		return cls(FIT)


@dataclasses.dataclass(frozen=True)
class Spacing:
	top: float = 0.0
	right: float = 0.0
	bottom: float = 0.0
	left: float = 0.0

	@classmethod
	def uniform(cls, value: float) -> "Spacing":
		return cls(value, value, value, value)

	@property
	def horizontal(self) -> float:
		return self.left + self.right

	@property
	def vertical(self) -> float:
		return self.top + self.bottom


@dataclasses.dataclass(frozen=True)
class Border:
	style: str
	width: float
	color: tuple[float, float, float]


@dataclasses.dataclass(frozen=True)
class Borders:
	top: Border | None = None
	right: Border | None = None
	bottom: Border | None = None
	left: Border | None = None


@dataclasses.dataclass(frozen=True)
class FontContext:
	family: str = DEFAULT_FONT_FAMILY
	size: float = DEFAULT_FONT_SIZE
	weight: str = DEFAULT_FONT_WEIGHT

	@property
	def bold(self) -> bool:
		return self.weight == "bold"


@dataclasses.dataclass(frozen=True)
class FontOverride:
	family: str | None = None
	size: float | None = None
	weight: str | None = None


@dataclasses.dataclass
class Img:
	src: str
	width: Dimension | float = dataclasses.field(default_factory=Dimension.fit)
	height: Dimension | float = dataclasses.field(default_factory=Dimension.fit)
	min_width: Dimension | None = None
	max_width: Dimension | None = None
	min_height: Dimension | None = None
	max_height: Dimension | None = None


@dataclasses.dataclass
class Row:
	height: Dimension | float = dataclasses.field(default_factory=Dimension.fit)
	min_height: Dimension | None = None
	max_height: Dimension | None = None
	width: Dimension | float = dataclasses.field(default_factory=Dimension.fill)
	padding: Spacing = dataclasses.field(default_factory=Spacing)
	borders: Borders = dataclasses.field(default_factory=Borders)
	vertical_align: str = DEFAULT_VERTICAL_ALIGN
	children: list["Col"] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class Col:
	width: Dimension | float = dataclasses.field(default_factory=Dimension.fill)
	min_width: Dimension | None = None
	max_width: Dimension | None = None
	height: Dimension | float = dataclasses.field(default_factory=Dimension.fill)
	padding: Spacing = dataclasses.field(default_factory=Spacing)
	borders: Borders = dataclasses.field(default_factory=Borders)
	font: FontOverride | FontContext = dataclasses.field(default_factory=FontOverride)
	text_align: str = DEFAULT_TEXT_ALIGN
	vertical_align: str = DEFAULT_VERTICAL_ALIGN
	children: list["str | Img | Row"] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class Document:
	width: Dimension | float | None = None
	height: Dimension | float | None = None
	padding: Spacing = dataclasses.field(default_factory=Spacing)
	font: FontContext = dataclasses.field(default_factory=FontContext)
	children: list[Row] = dataclasses.field(default_factory=list)


#============================================
def is_resolved(value: object) -> bool:
	"""
	Check whether a dimension slot already holds points.

	Args:
		value: Dimension slot value.

	Returns:
		True for plain numbers.
	"""
	return isinstance(value, (int, float)) and not isinstance(value, bool)

"""
ATML markup parsing.

Turns template XML into the geometry model. Attribute values are parsed
strictly: a value that does not match its grammar is a ParseError rather
than a silent default.
"""

# Standard Library
import re
import xml.etree.ElementTree as StdElementTree

# PIP3 modules
import defusedxml.ElementTree as ElementTree

# local repo modules
import atml_renderer as atr
import atml_renderer.config
import atml_renderer.errors
import atml_renderer.geometry


Dimension = atr.geometry.Dimension
Spacing = atr.geometry.Spacing
Border = atr.geometry.Border
Borders = atr.geometry.Borders
FontContext = atr.geometry.FontContext
FontOverride = atr.geometry.FontOverride
Document = atr.geometry.Document
Row = atr.geometry.Row
Col = atr.geometry.Col
Img = atr.geometry.Img
ParseError = atr.errors.ParseError

DEFAULT_FONT_FAMILY = atr.config.DEFAULT_FONT_FAMILY
DEFAULT_FONT_SIZE = atr.config.DEFAULT_FONT_SIZE
DEFAULT_FONT_WEIGHT = atr.config.DEFAULT_FONT_WEIGHT
DEFAULT_TEXT_ALIGN = atr.config.DEFAULT_TEXT_ALIGN
DEFAULT_VERTICAL_ALIGN = atr.config.DEFAULT_VERTICAL_ALIGN
TEXT_ALIGNS = atr.config.TEXT_ALIGNS
VERTICAL_ALIGNS = atr.config.VERTICAL_ALIGNS
FONT_WEIGHTS = atr.config.FONT_WEIGHTS
BORDER_STYLES = atr.config.BORDER_STYLES
px_to_points = atr.config.px_to_points

NUMBER_PATTERN = re.compile(r"^[0-9]+(\.[0-9]+)?$|^\.[0-9]+$")
HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
SIDES = ("top", "right", "bottom", "left")


#============================================
def parse_number(value: str, source: str) -> float:
	"""
	Parse an unsigned decimal number.

	Args:
		value: Numeric text without a unit.
		source: Full attribute value for error messages.

	Returns:
		Parsed float.
	"""
	if not NUMBER_PATTERN.match(value):
		raise ParseError(f"Invalid number in value: {source!r}")
	return float(value)


#============================================
def parse_dimension(value: str) -> Dimension:
	"""
	Parse a dimension value.

	Args:
		value: String like "10pt", "40px", "50%", "fill", or "fit".

	Returns:
		Dimension.
	"""
	text = value.strip()
	if text == "fill":
		return Dimension.fill()
	if text == "fit":
		return Dimension.fit()
	if text.endswith("pt"):
		return Dimension.fixed(parse_number(text[:-2], value))
	if text.endswith("px"):
		return Dimension.fixed(px_to_points(parse_number(text[:-2], value)))
	if text.endswith("%"):
		return Dimension.percent(parse_number(text[:-1], value))
	raise ParseError(f"Unknown dimension format: {value!r}")


#============================================
def parse_length(value: str) -> float:
	"""
	Parse a single spacing or border width token into points.

	Args:
		value: Token like "4pt", "8px", or "0".

	Returns:
		Points value.
	"""
	text = value.strip()
	if text == "0":
		return 0.0
	if text.endswith("pt"):
		return parse_number(text[:-2], value)
	if text.endswith("px"):
		return px_to_points(parse_number(text[:-2], value))
	raise ParseError(f"Invalid spacing value: {value!r}")


#============================================
def parse_spacing(value: str) -> Spacing:
	"""
	Parse a 1, 2, or 4 token spacing shorthand.

	Args:
		value: Shorthand like "4pt" or "2pt 6pt" or "1pt 2pt 3pt 4pt".

	Returns:
		Spacing.
	"""
	tokens = value.split()
	if len(tokens) == 1:
		return Spacing.uniform(parse_length(tokens[0]))
	if len(tokens) == 2:
		vertical = parse_length(tokens[0])
		horizontal = parse_length(tokens[1])
		return Spacing(vertical, horizontal, vertical, horizontal)
	if len(tokens) == 4:
		top, right, bottom, left = [parse_length(token) for token in tokens]
		return Spacing(top, right, bottom, left)
	raise ParseError(f"Invalid spacing value: {value!r}")


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC" or "#abc".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	match = HEX_COLOR_PATTERN.match(value)
	if match is None:
		raise ParseError(f"Invalid color: {value!r}")
	digits = match.group(1)
	if len(digits) == 3:
		digits = "".join(char * 2 for char in digits)
	red = int(digits[0:2], 16) / 255.0
	green = int(digits[2:4], 16) / 255.0
	blue = int(digits[4:6], 16) / 255.0
	return (red, green, blue)


#============================================
def parse_border(value: str) -> Border | None:
	"""
	Parse a border value.

	Args:
		value: "none" or "<style> <width> <color>".

	Returns:
		Border, or None for "none".
	"""
	text = value.strip()
	if text == "none":
		return None
	tokens = text.split()
	if len(tokens) != 3:
		raise ParseError(f"Invalid border value: {value!r}")
	style, width_text, color_text = tokens
	if style not in BORDER_STYLES:
		raise ParseError(f"Invalid border style: {style!r}")
	return Border(style=style, width=parse_length(width_text), color=parse_hex_color(color_text))


#============================================
def parse_font_size(value: str) -> float:
	"""
	Parse a font size in points or pixels.

	Args:
		value: String like "8pt" or "12px".

	Returns:
		Font size in points.
	"""
	text = value.strip()
	if text.endswith("pt"):
		size = parse_number(text[:-2], value)
	elif text.endswith("px"):
		size = px_to_points(parse_number(text[:-2], value))
	else:
		raise ParseError(f"Invalid font size: {value!r}")
	if size <= 0:
		raise ParseError(f"Font size must be positive: {value!r}")
	return size


#============================================
def parse_choice(value: str, choices: tuple[str, ...], name: str) -> str:
	text = value.strip()
	if text not in choices:
		raise ParseError(f"Invalid {name}: {value!r} (expected one of {', '.join(choices)})")
	return text


#============================================
def get_dimension(
	element: StdElementTree.Element,
	name: str,
	default: Dimension | None,
) -> Dimension | None:
	value = element.attrib.get(name)
	if value is None:
		return default
	return parse_dimension(value)


#============================================
def get_padding(element: StdElementTree.Element) -> Spacing:
	"""
	Read the padding shorthand and apply per-side overrides.

	Args:
		element: XML element.

	Returns:
		Spacing.
	"""
	base = parse_spacing(element.attrib.get("padding", "0"))
	sides = {}
	for side in SIDES:
		value = element.attrib.get(f"padding-{side}")
		if value is None:
			sides[side] = getattr(base, side)
		else:
			sides[side] = parse_length(value)
	return Spacing(**sides)


#============================================
def get_borders(element: StdElementTree.Element) -> Borders:
	"""
	Read the border shorthand and apply per-side overrides.

	Args:
		element: XML element.

	Returns:
		Borders.
	"""
	shorthand = element.attrib.get("border")
	base = parse_border(shorthand) if shorthand is not None else None
	sides = {}
	for side in SIDES:
		value = element.attrib.get(f"border-{side}")
		sides[side] = base if value is None else parse_border(value)
	return Borders(**sides)


#============================================
def get_font_override(element: StdElementTree.Element) -> FontOverride:
	family = element.attrib.get("font-family")
	size = element.attrib.get("font-size")
	weight = element.attrib.get("font-weight")
	return FontOverride(
		family=family,
		size=parse_font_size(size) if size is not None else None,
		weight=parse_choice(weight, FONT_WEIGHTS, "font-weight") if weight is not None else None,
	)


#============================================
def require_attribute(element: StdElementTree.Element, name: str) -> str:
	value = element.attrib.get(name)
	if value is None:
		raise ParseError(f"Missing required attribute: {name} on <{element.tag}>")
	return value


#============================================
def parse_document_element(element: StdElementTree.Element) -> Document:
	"""
	Parse the root document element.

	Args:
		element: <document> element.

	Returns:
		Document.
	"""
	if element.tag != "document":
		raise ParseError(f"Root element must be <document>, got <{element.tag}>")
	width = parse_dimension(require_attribute(element, "width"))
	height = parse_dimension(require_attribute(element, "height"))
	override = get_font_override(element)
	font = FontContext(
		family=override.family if override.family is not None else DEFAULT_FONT_FAMILY,
		size=override.size if override.size is not None else DEFAULT_FONT_SIZE,
		weight=override.weight if override.weight is not None else DEFAULT_FONT_WEIGHT,
	)
	check_no_text(element)
	children: list[Row] = []
	for child in list(element):
		if child.tag != "row":
			raise ParseError(f"<document> may only contain <row> children, got <{child.tag}>")
		children.append(parse_row_element(child))
	return Document(
		width=width,
		height=height,
		padding=get_padding(element),
		font=font,
		children=children,
	)


#============================================
def parse_row_element(element: StdElementTree.Element) -> Row:
	"""
	Parse a row element.

	Args:
		element: <row> element.

	Returns:
		Row.
	"""
	check_no_text(element)
	children: list[Col] = []
	for child in list(element):
		if child.tag != "col":
			raise ParseError(f"<row> may only contain <col> children, got <{child.tag}>")
		children.append(parse_col_element(child))
	return Row(
		height=get_dimension(element, "height", Dimension.fit()),
		min_height=get_dimension(element, "min-height", None),
		max_height=get_dimension(element, "max-height", None),
		width=get_dimension(element, "width", Dimension.fill()),
		padding=get_padding(element),
		borders=get_borders(element),
		vertical_align=parse_choice(
			element.attrib.get("vertical-align", DEFAULT_VERTICAL_ALIGN),
			VERTICAL_ALIGNS,
			"vertical-align",
		),
		children=children,
	)


#============================================
def parse_col_element(element: StdElementTree.Element) -> Col:
	"""
	Parse a column element with its mixed text and element children.

	Args:
		element: <col> element.

	Returns:
		Col.
	"""
	children: list = []
	append_text(children, element.text)
	for child in list(element):
		if child.tag == "img":
			children.append(parse_img_element(child))
		elif child.tag == "row":
			children.append(parse_row_element(child))
		elif child.tag == "col":
			raise ParseError("<col> cannot be a direct child of another <col>")
		else:
			raise ParseError(f"<col> may not contain <{child.tag}>")
		append_text(children, child.tail)
	return Col(
		width=get_dimension(element, "width", Dimension.fill()),
		min_width=get_dimension(element, "min-width", None),
		max_width=get_dimension(element, "max-width", None),
		height=get_dimension(element, "height", Dimension.fill()),
		padding=get_padding(element),
		borders=get_borders(element),
		font=get_font_override(element),
		text_align=parse_choice(
			element.attrib.get("text-align", DEFAULT_TEXT_ALIGN),
			TEXT_ALIGNS,
			"text-align",
		),
		vertical_align=parse_choice(
			element.attrib.get("vertical-align", DEFAULT_VERTICAL_ALIGN),
			VERTICAL_ALIGNS,
			"vertical-align",
		),
		children=children,
	)


#============================================
def parse_img_element(element: StdElementTree.Element) -> Img:
	if list(element):
		raise ParseError("<img> may not contain child elements")
	return Img(
		src=require_attribute(element, "src"),
		width=get_dimension(element, "width", Dimension.fit()),
		height=get_dimension(element, "height", Dimension.fit()),
		min_width=get_dimension(element, "min-width", None),
		max_width=get_dimension(element, "max-width", None),
		min_height=get_dimension(element, "min-height", None),
		max_height=get_dimension(element, "max-height", None),
	)


#============================================
def append_text(children: list, text: str | None) -> None:
	if text is None:
		return
	stripped = text.strip()
	if stripped:
		children.append(stripped)


#============================================
def check_no_text(element: StdElementTree.Element) -> None:
	"""
	Reject loose text inside containers that only hold elements.

	Args:
		element: <document> or <row> element.
	"""
	pieces = [element.text] + [child.tail for child in list(element)]
	for piece in pieces:
		if piece is not None and piece.strip():
			raise ParseError(f"<{element.tag}> may not contain text: {piece.strip()!r}")


#============================================
def parse_markup(markup: "str | bytes") -> Document:
	"""
	Parse ATML markup into a Document tree.

	Args:
		markup: XML text or bytes.

	Returns:
		Unresolved Document.

	Raises:
		ParseError: On malformed XML, bad nesting, or invalid attributes.
	"""
	try:
		root = ElementTree.fromstring(markup)
	except (ElementTree.ParseError, ValueError) as error:
		raise ParseError(f"XML parse error: {error}") from error
	return parse_document_element(root)

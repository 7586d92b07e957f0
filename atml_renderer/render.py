"""
Box rendering onto a canvas backend.

Walks a resolved document tree depth-first and issues draw calls. Layout
coordinates run top-down from the page's top-left corner; canvas
coordinates run bottom-up, so every placement is flipped with
canvas_y = page_height - layout_y (- element_height for boxes anchored at
their bottom edge).
"""

# Standard Library
import base64
import binascii
import contextlib
import os
import tempfile

# local repo modules
import atml_renderer as atr
import atml_renderer.backend
import atml_renderer.config
import atml_renderer.errors
import atml_renderer.fonts
import atml_renderer.geometry
import atml_renderer.measure


Document = atr.geometry.Document
Row = atr.geometry.Row
Col = atr.geometry.Col
Img = atr.geometry.Img
Borders = atr.geometry.Borders
FontContext = atr.geometry.FontContext
CanvasBackend = atr.backend.CanvasBackend
HeuristicMeasure = atr.measure.HeuristicMeasure
AtmlError = atr.errors.AtmlError
RenderError = atr.errors.RenderError

IMAGE_MIME_SUFFIXES = atr.config.IMAGE_MIME_SUFFIXES
TEMP_IMAGE_PREFIX = atr.config.TEMP_IMAGE_PREFIX
is_resolved = atr.geometry.is_resolved
merge_font = atr.fonts.merge_font


#============================================
def render_document(
	doc: Document,
	backend: CanvasBackend,
	measure: HeuristicMeasure | None = None,
) -> CanvasBackend:
	"""
	Draw a resolved document onto a backend.

	Args:
		doc: Resolved Document.
		backend: Canvas backend sized to the document.
		measure: Content measurement strategy; must match the one used
			for layout so text cursors agree with row stacks.

	Returns:
		The backend, ready to export.

	Raises:
		TypeError: If the tree has not been resolved.
		RenderError: If drawing fails.
	"""
	check_resolved(doc)
	if measure is None:
		measure = HeuristicMeasure()
	try:
		render_rows(backend, doc.children, doc.padding.left, doc.padding.top, doc.font, measure)
	except AtmlError:
		raise
	except Exception as error:
		raise RenderError(f"Render error: {error}") from error
	return backend


#============================================
def check_resolved(doc: Document) -> None:
	"""
	Verify that every box in the tree carries point dimensions.

	Args:
		doc: Document to check.

	Raises:
		TypeError: On a non-Document root, a dimension that is still a
			Dimension, or an unexpected node type.
	"""
	if not isinstance(doc, Document):
		raise TypeError(f"expected Document, got {type(doc).__name__}")
	require_points(doc.width, "document width")
	require_points(doc.height, "document height")
	for row in doc.children:
		check_resolved_row(row)


#============================================
def check_resolved_row(row: Row) -> None:
	if not isinstance(row, Row):
		raise TypeError(f"expected Row, got {type(row).__name__}")
	require_points(row.width, "row width")
	require_points(row.height, "row height")
	for col in row.children:
		if not isinstance(col, Col):
			raise TypeError(f"expected Col, got {type(col).__name__}")
		require_points(col.width, "column width")
		require_points(col.height, "column height")
		for child in col.children:
			if isinstance(child, Row):
				check_resolved_row(child)
			elif isinstance(child, Img):
				require_points(child.width, "image width")
				require_points(child.height, "image height")
			elif not isinstance(child, str):
				raise TypeError(f"unexpected column child: {type(child).__name__}")


#============================================
def require_points(value: object, label: str) -> float:
	if not is_resolved(value):
		raise TypeError(f"{label} is not resolved: {value!r}")
	return float(value)


#============================================
def page_height(backend: CanvasBackend) -> float:
	return backend.size()[1]


#============================================
def compute_align_offset(available: float, used: float, align: str) -> float:
	"""
	Compute an alignment offset inside the available space.

	Args:
		available: Available dimension.
		used: Dimension of the aligned block.
		align: "left"/"top", "center", or "right"/"bottom".

	Returns:
		Offset in points, never negative.
	"""
	if align in ("left", "top"):
		return 0.0
	if align in ("right", "bottom"):
		return max(0.0, available - used)
	return max(0.0, (available - used) / 2.0)


#============================================
def render_rows(
	backend: CanvasBackend,
	rows: list[Row],
	origin_x: float,
	origin_y: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> float:
	"""
	Render a row stack top to bottom.

	Args:
		backend: Canvas backend.
		rows: Resolved rows.
		origin_x: Layout x of the stack.
		origin_y: Layout y of the first row.
		font: Inherited font.
		measure: Content measurement strategy.

	Returns:
		Layout y just below the last row.
	"""
	current_y = origin_y
	for row in rows:
		render_row(backend, row, origin_x, current_y, font, measure)
		current_y += require_points(row.height, "row height")
	return current_y


#============================================
def render_row(
	backend: CanvasBackend,
	row: Row,
	origin_x: float,
	origin_y: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> None:
	width = require_points(row.width, "row width")
	height = require_points(row.height, "row height")
	draw_borders(backend, origin_x, origin_y, width, height, row.borders)
	current_x = origin_x + row.padding.left
	inner_y = origin_y + row.padding.top
	for col in row.children:
		render_col(backend, col, current_x, inner_y, font, measure)
		current_x += require_points(col.width, "column width")


#============================================
def render_col(
	backend: CanvasBackend,
	col: Col,
	origin_x: float,
	origin_y: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> None:
	"""
	Render a column's borders and then its children in document order.

	Args:
		backend: Canvas backend.
		col: Resolved column.
		origin_x: Layout x of the column.
		origin_y: Layout y of the column.
		font: Inherited font.
		measure: Content measurement strategy.
	"""
	width = require_points(col.width, "column width")
	height = require_points(col.height, "column height")
	col_font = merge_font(font, col.font)
	draw_borders(backend, origin_x, origin_y, width, height, col.borders)

	inner_x = origin_x + col.padding.left
	inner_y = origin_y + col.padding.top
	inner_width = max(0.0, width - col.padding.horizontal)
	inner_height = max(0.0, height - col.padding.vertical)
	inner_bottom = inner_y + inner_height

	cursor = inner_y
	for child in col.children:
		remaining = max(0.0, inner_bottom - cursor)
		if isinstance(child, str):
			cursor += render_text(backend, child, col, inner_x, cursor, inner_width, remaining, col_font, measure)
		elif isinstance(child, Img):
			render_img(backend, child, col, inner_x, cursor, inner_width, remaining)
			cursor += require_points(child.height, "image height")
		else:
			render_row(backend, child, inner_x, cursor, col_font, measure)
			cursor += require_points(child.height, "row height")


#============================================
def render_text(
	backend: CanvasBackend,
	text: str,
	col: Col,
	x: float,
	layout_y: float,
	inner_width: float,
	remaining: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> float:
	"""
	Render one text run.

	Args:
		backend: Canvas backend.
		text: Text run.
		col: Owning column (alignment source).
		x: Layout x of the column's inner box.
		layout_y: Layout y of the cursor.
		inner_width: Column inner width.
		remaining: Height between the cursor and the inner bottom edge.
		font: Effective font.
		measure: Content measurement strategy.

	Returns:
		Estimated text height, which the cursor advances by.
	"""
	line_height = measure.line_height(font)
	text_height = measure.text_height(text, inner_width, font)
	block_width = min(measure.text_width(text, font), inner_width)
	x_offset = compute_align_offset(inner_width, block_width, col.text_align)
	if col.vertical_align == "center":
		visual_height = text_height - line_height + font.size
		y_offset = max(0.0, (remaining - visual_height) / 2.0)
	elif col.vertical_align == "bottom":
		y_offset = max(0.0, remaining - text_height)
	else:
		y_offset = 0.0

	backend.set_font(font.family, font.size, font.bold)
	backend.set_line_leading(line_height)
	top_left = (x + x_offset, page_height(backend) - (layout_y + y_offset))
	box_height = max(remaining - y_offset, line_height)
	backend.text_wrap(top_left, (block_width, box_height), text, col.text_align)
	return text_height


#============================================
def render_img(
	backend: CanvasBackend,
	img: Img,
	col: Col,
	x: float,
	layout_y: float,
	inner_width: float,
	remaining: float,
) -> None:
	"""
	Render one image, skipping images with no area.

	Args:
		backend: Canvas backend.
		img: Resolved image.
		col: Owning column (alignment source).
		x: Layout x of the column's inner box.
		layout_y: Layout y of the cursor.
		inner_width: Column inner width.
		remaining: Height between the cursor and the inner bottom edge.
	"""
	width = require_points(img.width, "image width")
	height = require_points(img.height, "image height")
	if width <= 0.0 or height <= 0.0:
		return
	x_offset = compute_align_offset(inner_width, width, col.text_align)
	y_offset = compute_align_offset(remaining, height, col.vertical_align)
	bottom_left = (x + x_offset, page_height(backend) - (layout_y + y_offset) - height)
	with image_source_path(img.src) as image_path:
		backend.add_image(image_path, bottom_left, (width, height))


#============================================
def split_inline_image(src: str) -> tuple[str, str] | None:
	"""
	Split an inline image source into (suffix, base64 payload).

	Args:
		src: Image source attribute.

	Returns:
		Tuple of (file suffix, payload), or None for a file path.
	"""
	if src.startswith("base64:"):
		return (".png", src[len("base64:"):])
	if src.startswith("data:"):
		header, separator, payload = src[len("data:"):].partition(",")
		if not separator or not header.endswith(";base64"):
			raise RenderError("Render error: only base64 data URIs are supported")
		mime = header[:-len(";base64")].strip().lower()
		return (IMAGE_MIME_SUFFIXES.get(mime, ".png"), payload)
	return None


#============================================
@contextlib.contextmanager
def image_source_path(src: str):
	"""
	Yield a file path for an image source.

	Inline sources are decoded into a temporary file that is removed when
	the block exits, whether or not drawing succeeded.

	Args:
		src: Path, "base64:<data>", or "data:<mime>;base64,<data>".

	Yields:
		Image file path.
	"""
	inline = split_inline_image(src)
	if inline is None:
		yield src
		return
	suffix, payload = inline
	try:
		data = base64.b64decode("".join(payload.split()), validate=True)
	except (binascii.Error, ValueError) as error:
		raise RenderError(f"Render error: invalid base64 image data: {error}") from error
	handle, temp_path = tempfile.mkstemp(prefix=TEMP_IMAGE_PREFIX, suffix=suffix)
	try:
		with os.fdopen(handle, "wb") as temp_file:
			temp_file.write(data)
		yield temp_path
	finally:
		os.remove(temp_path)


#============================================
def draw_borders(
	backend: CanvasBackend,
	x: float,
	layout_y: float,
	width: float,
	height: float,
	borders: Borders,
) -> None:
	"""
	Stroke the four border sides of a box: top, right, bottom, left.

	Args:
		backend: Canvas backend.
		x: Layout x of the box.
		layout_y: Layout y of the box.
		width: Box width.
		height: Box height.
		borders: Border sides; None sides are skipped.
	"""
	top = page_height(backend) - layout_y
	bottom = top - height
	left = x
	right = x + width
	sides = (
		(borders.top, (left, top), (right, top)),
		(borders.right, (right, top), (right, bottom)),
		(borders.bottom, (left, bottom), (right, bottom)),
		(borders.left, (left, top), (left, bottom)),
	)
	for border, start, end in sides:
		if border is None:
			continue
		backend.set_stroke_color(border.color)
		backend.set_line_width(border.width)
		backend.line(start, end, border.style)
		backend.stroke()

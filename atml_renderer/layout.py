"""
Dimension resolution for template box trees.

Every width/height on every node is turned into points. Rows stack on the
vertical axis, columns sit side by side on the horizontal axis, and the two
resolvers recurse into each other through nested rows. On each axis the
fixed and fit siblings are resolved and clamped first; fill siblings then
share whatever is left equally, each clamped on its own.
"""

# Standard Library
import dataclasses

# local repo modules
import atml_renderer as atr
import atml_renderer.errors
import atml_renderer.fonts
import atml_renderer.geometry
import atml_renderer.measure


Dimension = atr.geometry.Dimension
Document = atr.geometry.Document
Row = atr.geometry.Row
Col = atr.geometry.Col
Img = atr.geometry.Img
FontContext = atr.geometry.FontContext
HeuristicMeasure = atr.measure.HeuristicMeasure
LayoutError = atr.errors.LayoutError

FIXED = atr.geometry.FIXED
PERCENT = atr.geometry.PERCENT
FILL = atr.geometry.FILL
FIT = atr.geometry.FIT
is_resolved = atr.geometry.is_resolved
merge_font = atr.fonts.merge_font


#============================================
def resolve(doc: Document, measure: HeuristicMeasure | None = None) -> Document:
	"""
	Resolve every dimension in a document tree to points.

	Args:
		doc: Parsed Document.
		measure: Content measurement strategy.

	Returns:
		New Document with float dimensions, cleared min/max fields, and a
		complete font on every column.

	Raises:
		LayoutError: If the root is not a Document or resolution fails.
	"""
	if not isinstance(doc, Document):
		raise LayoutError(f"Layout error: expected Document, got {type(doc).__name__}")
	if doc.width is None or doc.height is None:
		raise LayoutError("Layout error: expected Document with width and height")
	if measure is None:
		measure = HeuristicMeasure()
	try:
		return resolve_document(doc, measure)
	except LayoutError:
		raise
	except Exception as error:
		raise LayoutError(f"Layout error: {error}") from error


#============================================
def resolve_document(doc: Document, measure: HeuristicMeasure) -> Document:
	"""
	Resolve the document box and its row stack.

	Args:
		doc: Parsed Document.
		measure: Content measurement strategy.

	Returns:
		Resolved Document.
	"""
	width = fixed_points(doc.width)
	height = fixed_points(doc.height)
	inner_width = max(0.0, width - doc.padding.horizontal)
	inner_height = max(0.0, height - doc.padding.vertical)
	rows = resolve_rows(doc.children, inner_width, inner_height, doc.font, measure)
	return dataclasses.replace(doc, width=width, height=height, children=rows)


#============================================
def resolve_dim(value: "Dimension | float", parent: float) -> float:
	"""
	Resolve a dimension against its parent size on the same axis.

	Args:
		value: Dimension or resolved float.
		parent: Parent size in points.

	Returns:
		Points value.
	"""
	if is_resolved(value):
		return float(value)
	if value.kind == FIXED:
		return value.value
	if value.kind == PERCENT:
		return parent * value.value / 100.0
	if value.kind == FILL:
		return float(parent)
	return 0.0


#============================================
def fixed_points(value: "Dimension | float") -> float:
	"""
	Return the points of a fixed dimension, or 0.0 for anything relative.

	Used where no parent size applies: the document box and natural sizes.

	Args:
		value: Dimension or resolved float.

	Returns:
		Points value.
	"""
	if is_resolved(value):
		return float(value)
	if value.kind == FIXED:
		return value.value
	return 0.0


#============================================
def is_fill(value: "Dimension | float") -> bool:
	return isinstance(value, Dimension) and value.kind == FILL


#============================================
def is_fit(value: "Dimension | float") -> bool:
	return isinstance(value, Dimension) and value.kind == FIT


#============================================
def clamp(
	value: float,
	min_dim: "Dimension | float | None",
	max_dim: "Dimension | float | None",
	parent: float,
) -> float:
	"""
	Apply min then max constraints, each resolved against the parent.

	When the constraints contradict each other the max wins.

	Args:
		value: Base value in points.
		min_dim: Optional minimum.
		max_dim: Optional maximum.
		parent: Parent size for percentage constraints.

	Returns:
		Clamped value.
	"""
	if min_dim is not None:
		value = max(value, resolve_dim(min_dim, parent))
	if max_dim is not None:
		value = min(value, resolve_dim(max_dim, parent))
	return value


#============================================
def resolve_rows(
	rows: list[Row],
	parent_width: float,
	parent_height: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> list[Row]:
	"""
	Resolve a vertical stack of rows inside a parent box.

	Args:
		rows: Rows in document order.
		parent_width: Parent inner width.
		parent_height: Parent inner height.
		font: Inherited font.
		measure: Content measurement strategy.

	Returns:
		Resolved rows.
	"""
	heights: list[float | None] = []
	used_height = 0.0
	fill_count = 0
	for row in rows:
		if is_fill(row.height):
			heights.append(None)
			fill_count += 1
			continue
		height = row_natural_height(row, parent_width, parent_height, font, measure)
		height = clamp(height, row.min_height, row.max_height, parent_height)
		heights.append(height)
		used_height += height

	fill_height = 0.0
	if fill_count > 0:
		fill_height = max(0.0, (parent_height - used_height) / fill_count)

	resolved: list[Row] = []
	for row, height in zip(rows, heights):
		if height is None:
			height = clamp(fill_height, row.min_height, row.max_height, parent_height)
		resolved.append(resolve_row(row, parent_width, height, font, measure))
	return resolved


#============================================
def row_natural_height(
	row: Row,
	parent_width: float,
	parent_height: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> float:
	"""
	Compute the height a non-fill row asks for.

	Args:
		row: Row to measure.
		parent_width: Width used for text wrapping estimates.
		parent_height: Parent height for percentages.
		font: Inherited font.
		measure: Content measurement strategy.

	Returns:
		Height in points before clamping.
	"""
	if is_fit(row.height):
		heights = [
			col_content_height(col, parent_width, font, measure)
			for col in row.children
		]
		return max(heights, default=0.0)
	return resolve_dim(row.height, parent_height)


#============================================
def resolve_row(
	row: Row,
	parent_width: float,
	height: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> Row:
	"""
	Resolve a row's width and its columns once its height is known.

	Args:
		row: Row to resolve.
		parent_width: Parent inner width.
		height: Final row height.
		font: Inherited font.
		measure: Content measurement strategy.

	Returns:
		Resolved Row.
	"""
	if is_fit(row.width):
		width = sum(natural_col_width(col, font, measure) for col in row.children)
	else:
		width = resolve_dim(row.width, parent_width)
	width = max(0.0, min(width, parent_width))

	inner_width = max(0.0, width - row.padding.horizontal)
	inner_height = max(0.0, height - row.padding.vertical)
	cols = resolve_cols(row.children, inner_width, inner_height, font, measure)
	return dataclasses.replace(
		row,
		width=width,
		height=height,
		min_height=None,
		max_height=None,
		children=cols,
	)


#============================================
def resolve_cols(
	cols: list[Col],
	row_width: float,
	row_height: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> list[Col]:
	"""
	Resolve columns laid out left to right inside a row.

	Args:
		cols: Columns in document order.
		row_width: Row inner width.
		row_height: Row inner height.
		font: Inherited font.
		measure: Content measurement strategy.

	Returns:
		Resolved columns.
	"""
	widths: list[float | None] = []
	used_width = 0.0
	fill_count = 0
	for col in cols:
		if is_fill(col.width):
			widths.append(None)
			fill_count += 1
			continue
		if is_fit(col.width):
			width = natural_col_width(col, font, measure)
		else:
			width = resolve_dim(col.width, row_width)
		width = clamp(width, col.min_width, col.max_width, row_width)
		widths.append(width)
		used_width += width

	fill_width = 0.0
	if fill_count > 0:
		fill_width = max(0.0, (row_width - used_width) / fill_count)

	resolved: list[Col] = []
	for col, width in zip(cols, widths):
		if width is None:
			width = clamp(fill_width, col.min_width, col.max_width, row_width)
		resolved.append(resolve_col(col, width, row_height, font, measure))
	return resolved


#============================================
def resolve_col(
	col: Col,
	width: float,
	row_height: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> Col:
	"""
	Resolve a column's height, font, and children once its width is known.

	Args:
		col: Column to resolve.
		width: Final column width.
		row_height: Row inner height.
		font: Inherited font.
		measure: Content measurement strategy.

	Returns:
		Resolved Col.
	"""
	col_font = merge_font(font, col.font)
	if is_fill(col.height):
		height = float(row_height)
	elif is_fit(col.height):
		height = col_content_height(col, width, font, measure)
	else:
		height = resolve_dim(col.height, row_height)

	inner_width = max(0.0, width - col.padding.horizontal)
	inner_height = max(0.0, height - col.padding.vertical)
	children = resolve_col_children(col.children, inner_width, inner_height, col_font, measure)
	return dataclasses.replace(
		col,
		width=width,
		height=height,
		min_width=None,
		max_width=None,
		font=col_font,
		children=children,
	)


#============================================
def resolve_col_children(
	children: list,
	inner_width: float,
	inner_height: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> list:
	"""
	Resolve the mixed children of a column.

	Nested rows form one row stack inside the column's inner box. Text runs
	and images take their share of the height first, in the same amounts
	the renderer advances its cursor by.

	Args:
		children: Text runs, Imgs, and Rows.
		inner_width: Column inner width.
		inner_height: Column inner height.
		font: Column font.
		measure: Content measurement strategy.

	Returns:
		Resolved children in document order.
	"""
	resolved: list = []
	row_slots: list[int] = []
	rows: list[Row] = []
	consumed = 0.0
	for child in children:
		if isinstance(child, str):
			consumed += measure.text_height(child, inner_width, font)
			resolved.append(child)
		elif isinstance(child, Img):
			image = resolve_img(child, inner_width, inner_height)
			consumed += image.height
			resolved.append(image)
		else:
			row_slots.append(len(resolved))
			rows.append(child)
			resolved.append(child)

	stack_height = max(0.0, inner_height - consumed)
	resolved_rows = resolve_rows(rows, inner_width, stack_height, font, measure)
	for slot, row in zip(row_slots, resolved_rows):
		resolved[slot] = row
	return resolved


#============================================
def resolve_img(img: Img, parent_width: float, parent_height: float) -> Img:
	"""
	Resolve an image box.

	No intrinsic image size is known at layout time, so a fit axis is 0.

	Args:
		img: Image node.
		parent_width: Column inner width.
		parent_height: Column inner height.

	Returns:
		Resolved Img.
	"""
	width = resolve_dim(img.width, parent_width)
	height = resolve_dim(img.height, parent_height)
	width = clamp(width, img.min_width, img.max_width, parent_width)
	height = clamp(height, img.min_height, img.max_height, parent_height)
	if is_fit(img.width) and not is_fit(img.height):
		width = 0.0
	elif is_fit(img.height) and not is_fit(img.width):
		height = 0.0
	return dataclasses.replace(
		img,
		width=width,
		height=height,
		min_width=None,
		max_width=None,
		min_height=None,
		max_height=None,
	)


#============================================
def col_content_height(
	col: Col,
	width: float,
	font: FontContext,
	measure: HeuristicMeasure,
) -> float:
	"""
	Estimate the height of a column's content plus its vertical padding.

	Args:
		col: Column to measure.
		width: Width used for text wrapping.
		font: Inherited font (the column's own font is merged in here).
		measure: Content measurement strategy.

	Returns:
		Height in points.
	"""
	col_font = merge_font(font, col.font)
	total = 0.0
	for child in col.children:
		if isinstance(child, str):
			total += measure.text_height(child, width, col_font)
		elif isinstance(child, Img):
			if not is_fit(child.height):
				total += fixed_points(child.height)
		else:
			height = row_natural_height(child, width, 0.0, col_font, measure)
			total += clamp(height, child.min_height, child.max_height, 0.0)
	return total + col.padding.vertical


#============================================
def natural_col_width(col: Col, font: FontContext, measure: HeuristicMeasure) -> float:
	"""
	Estimate the natural width of a column.

	A column with a fixed width asks for exactly that; otherwise it asks
	for its widest content piece.

	Args:
		col: Column to measure.
		font: Inherited font.
		measure: Content measurement strategy.

	Returns:
		Width in points including horizontal padding.
	"""
	if is_resolved(col.width) or col.width.kind == FIXED:
		return fixed_points(col.width)
	col_font = merge_font(font, col.font)
	widest = 0.0
	for child in col.children:
		if isinstance(child, str):
			piece = measure.text_width(child, col_font)
		elif isinstance(child, Img):
			piece = fixed_points(child.width)
		else:
			piece = sum(natural_col_width(inner, col_font, measure) for inner in child.children)
		widest = max(widest, piece)
	return widest + col.padding.horizontal

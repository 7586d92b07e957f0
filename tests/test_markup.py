import pytest

import atml_renderer.errors
import atml_renderer.geometry
import atml_renderer.markup


Dimension = atml_renderer.geometry.Dimension
Spacing = atml_renderer.geometry.Spacing
Border = atml_renderer.geometry.Border
FontContext = atml_renderer.geometry.FontContext
Img = atml_renderer.geometry.Img
Row = atml_renderer.geometry.Row
ParseError = atml_renderer.errors.ParseError
parse_markup = atml_renderer.markup.parse_markup


#============================================
def wrap_col(body: str, col_attrs: str = "") -> str:
	"""
	Wrap column content in a minimal document.
	"""
	return (
		'<document width="200pt" height="100pt"><row>'
		f"<col {col_attrs}>{body}</col>"
		"</row></document>"
	)


#============================================
def parse_first_col(body: str, col_attrs: str = ""):
	doc = parse_markup(wrap_col(body, col_attrs))
	return doc.children[0].children[0]


#============================================
def test_minimal_document_defaults() -> None:
	doc = parse_markup('<document width="100pt" height="200pt"></document>')
	assert doc.width == Dimension.fixed(100)
	assert doc.height == Dimension.fixed(200)
	assert doc.font == FontContext("Helvetica", 8.0, "normal")
	assert doc.padding == Spacing()
	assert doc.children == []


#============================================
def test_dimension_grammar() -> None:
	"""
	All dimension forms parse; px converts to points.
	"""
	parse = atml_renderer.markup.parse_dimension
	assert parse("12.5pt") == Dimension.fixed(12.5)
	assert parse("40px") == Dimension.fixed(30.0)
	assert parse("50%") == Dimension.percent(50)
	assert parse("fill") == Dimension.fill()
	assert parse("fit") == Dimension.fit()
	for bad in ("10", "10em", "-5pt", "abcpt", ""):
		with pytest.raises(ParseError):
			parse(bad)


#============================================
def test_spacing_grammar() -> None:
	parse = atml_renderer.markup.parse_spacing
	assert parse("4pt") == Spacing(4, 4, 4, 4)
	assert parse("0") == Spacing()
	assert parse("2pt 6pt") == Spacing(2, 6, 2, 6)
	assert parse("1pt 2pt 3pt 4pt") == Spacing(1, 2, 3, 4)
	assert parse("8px") == Spacing.uniform(6.0)
	with pytest.raises(ParseError):
		parse("1pt 2pt 3pt")
	with pytest.raises(ParseError):
		parse("4em")


#============================================
def test_padding_side_overrides_shorthand() -> None:
	col = parse_first_col("", 'padding="4pt" padding-left="10pt" padding-bottom="0"')
	assert col.padding == Spacing(4, 4, 0, 10)


#============================================
def test_border_grammar() -> None:
	parse = atml_renderer.markup.parse_border
	assert parse("none") is None
	assert parse("solid 1pt #000") == Border("solid", 1.0, (0.0, 0.0, 0.0))
	border = parse("dashed 2px #ff0000")
	assert border.style == "dashed"
	assert border.width == 1.5
	assert border.color == (1.0, 0.0, 0.0)
	for bad in ("groove 1pt #000", "solid 1pt red", "solid 1pt", "solid 1em #000"):
		with pytest.raises(ParseError):
			parse(bad)


#============================================
def test_border_side_overrides_shorthand() -> None:
	col = parse_first_col("", 'border="solid 1pt #000000" border-top="none" border-left="dotted 2pt #fff"')
	assert col.borders.top is None
	assert col.borders.right == Border("solid", 1.0, (0.0, 0.0, 0.0))
	assert col.borders.bottom == col.borders.right
	assert col.borders.left == Border("dotted", 2.0, (1.0, 1.0, 1.0))


#============================================
def test_element_defaults() -> None:
	doc = parse_markup(wrap_col('<img src="logo.png"/>'))
	row = doc.children[0]
	col = row.children[0]
	img = col.children[0]
	assert row.height == Dimension.fit()
	assert row.width == Dimension.fill()
	assert col.width == Dimension.fill()
	assert col.height == Dimension.fill()
	assert col.text_align == "left"
	assert col.vertical_align == "top"
	assert col.font.family is None and col.font.size is None
	assert img.src == "logo.png"
	assert img.width == Dimension.fit()
	assert img.height == Dimension.fit()


#============================================
def test_font_attributes() -> None:
	doc = parse_markup(
		'<document width="10pt" height="10pt" font-family="Times" font-size="16px" font-weight="bold"/>'
	)
	assert doc.font == FontContext("Times", 12.0, "bold")
	col = parse_first_col("", 'font-size="10pt"')
	assert col.font.size == 10.0
	assert col.font.weight is None


#============================================
def test_invalid_enumerations_rejected() -> None:
	for attrs in ('font-weight="heavy"', 'text-align="justify"', 'vertical-align="middle"', 'font-size="10"'):
		with pytest.raises(ParseError):
			parse_first_col("", attrs)


#============================================
def test_text_runs_are_trimmed_and_interleaved() -> None:
	"""
	Text around elements is kept in order; blank runs and comments vanish.
	"""
	col = parse_first_col('  Before <img src="a.png"/>\n   <!-- note -->  After  <row height="5pt"/>   ')
	assert col.children[0] == "Before"
	assert isinstance(col.children[1], Img)
	assert col.children[2] == "After"
	assert isinstance(col.children[3], Row)
	assert len(col.children) == 4


#============================================
def test_nesting_violations() -> None:
	bad_documents = [
		'<document width="1pt" height="1pt"><col/></document>',
		'<document width="1pt" height="1pt"><row><row/></row></document>',
		'<document width="1pt" height="1pt"><row><img src="a.png"/></row></document>',
		wrap_col("<col/>"),
		wrap_col("<span/>"),
		'<document width="1pt" height="1pt"><row>loose text<col/></row></document>',
		'<document width="1pt" height="1pt">loose text</document>',
		'<row/>',
	]
	for markup in bad_documents:
		with pytest.raises(ParseError):
			parse_markup(markup)


#============================================
def test_missing_required_attributes() -> None:
	with pytest.raises(ParseError, match="width"):
		parse_markup('<document height="1pt"/>')
	with pytest.raises(ParseError, match="src"):
		parse_markup(wrap_col("<img/>"))


#============================================
def test_malformed_xml() -> None:
	with pytest.raises(ParseError, match="XML parse error"):
		parse_markup('<document width="1pt" height="1pt"><row></document>')


#============================================
def test_parses_bytes_with_declaration() -> None:
	markup = b'<?xml version="1.0" encoding="UTF-8"?>\n<document width="5pt" height="6pt"/>'
	doc = parse_markup(markup)
	assert doc.height == Dimension.fixed(6)

import pathlib

import fitz
import PIL.Image

import atml_renderer.pipeline


DPI = 144
INK_THRESHOLD = 128


#============================================
def _render_pdf_first_page(data: bytes) -> PIL.Image.Image:
	"""
	Render the first page of a PDF to an image.

	Args:
		data: PDF bytes.

	Returns:
		PIL image.
	"""
	document = fitz.open(stream=data, filetype="pdf")
	page = document[0]
	scale = DPI / 72.0
	matrix = fitz.Matrix(scale, scale)
	pixmap = page.get_pixmap(matrix=matrix, alpha=False)
	image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	document.close()
	return image


#============================================
def _count_ink_ratio(gray: PIL.Image.Image, threshold: int) -> float:
	"""
	Compute the ink ratio for a grayscale region.

	Args:
		gray: Grayscale image region.
		threshold: Pixel intensity threshold.

	Returns:
		Ink ratio.
	"""
	pixels = list(gray.getdata())
	if not pixels:
		return 0.0
	ink = sum(1 for value in pixels if value < threshold)
	return ink / len(pixels)


#============================================
def test_rendered_page_places_border_image_and_text(png_path: pathlib.Path) -> None:
	"""
	Smoke test a rendered label: border on the edge, image and text inside.
	"""
	markup = (
		'<document width="200pt" height="100pt">'
		'<row height="100pt" border="solid 4pt #000000">'
		'<col padding="10pt">'
		f'<img src="{png_path}" width="50pt" height="20pt"/>'
		"Label text"
		"</col></row></document>"
	)
	image = _render_pdf_first_page(atml_renderer.pipeline.render_to_bytes(markup))
	scale = DPI / 72.0
	assert image.size == (int(200 * scale), int(100 * scale))

	gray = image.convert("L")
	top_strip = gray.crop((0, 0, image.size[0], int(1 * scale)))
	assert _count_ink_ratio(top_strip, INK_THRESHOLD) > 0.9

	red, green, blue = image.getpixel((int(35 * scale), int(20 * scale)))
	assert red > 200 and green < 60 and blue < 60

	# text sits below the image, starting 30pt from the top
	text_region = gray.crop((int(10 * scale), int(30 * scale), int(110 * scale), int(42 * scale)))
	assert _count_ink_ratio(text_region, INK_THRESHOLD) > 0.01

	# the middle of the page stays blank
	blank_region = gray.crop((int(20 * scale), int(60 * scale), int(180 * scale), int(85 * scale)))
	assert _count_ink_ratio(blank_region, INK_THRESHOLD) == 0.0

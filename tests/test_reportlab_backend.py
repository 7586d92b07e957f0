import io
import pathlib

import pypdf
import pytest

import atml_renderer.reportlab_backend


ReportLabBackend = atml_renderer.reportlab_backend.ReportLabBackend


#============================================
def page_text(data: bytes) -> str:
	return pypdf.PdfReader(io.BytesIO(data)).pages[0].extract_text()


#============================================
def test_size_and_metadata() -> None:
	backend = ReportLabBackend(120, 80, {"title": "Drawer 3"})
	assert backend.size() == (120.0, 80.0)
	data = backend.export()
	reader = pypdf.PdfReader(io.BytesIO(data))
	assert reader.metadata.title == "Drawer 3"
	backend.cleanup()


#============================================
def test_export_is_stable_and_write_to(tmp_path: pathlib.Path) -> None:
	backend = ReportLabBackend(100, 50)
	backend.set_font("Helvetica", 10.0)
	backend.text_wrap((0.0, 50.0), (100.0, 50.0), "Hi")
	first = backend.export()
	assert backend.export() == first
	output_path = tmp_path / "page.pdf"
	backend.write_to(output_path)
	assert output_path.read_bytes() == first
	backend.cleanup()


#============================================
def test_text_wrap_stops_at_box_bottom() -> None:
	"""
	Lines below the box are dropped, but the first line always draws.
	"""
	backend = ReportLabBackend(200, 100)
	backend.set_font("Helvetica", 10.0)
	backend.set_line_leading(12.0)
	backend.text_wrap((10.0, 90.0), (150.0, 12.0), "alpha\nbravo\ncharlie")
	text = page_text(backend.export())
	assert "alpha" in text
	assert "charlie" not in text


#============================================
def test_text_wrap_word_wraps_to_width() -> None:
	backend = ReportLabBackend(200, 100)
	backend.set_font("Courier", 10.0)
	backend.set_line_leading(12.0)
	# Courier is 6pt per char at 10pt, so 40pt fits one five-letter word
	backend.text_wrap((0.0, 100.0), (40.0, 100.0), "aaaaa bbbbb", align="center")
	lines = [line.strip() for line in page_text(backend.export()).splitlines() if line.strip()]
	assert lines == ["aaaaa", "bbbbb"]


#============================================
def test_borders_and_image(png_path: pathlib.Path) -> None:
	backend = ReportLabBackend(100, 100)
	backend.set_stroke_color((1.0, 0.0, 0.0))
	backend.set_line_width(2.0)
	backend.line((0.0, 100.0), (100.0, 100.0), "dashed")
	backend.stroke()
	backend.add_image(str(png_path), (10.0, 10.0), (40.0, 20.0))
	data = backend.export()
	page = pypdf.PdfReader(io.BytesIO(data)).pages[0]
	assert len(page.images) == 1
	content = page.get_contents().get_data()
	assert b"[3 2] 0 d" in content
	assert backend.pending_paths == []


#============================================
def test_missing_image_raises() -> None:
	backend = ReportLabBackend(100, 100)
	with pytest.raises(FileNotFoundError):
		backend.add_image("/nonexistent/image.png", (0.0, 0.0), (10.0, 10.0))

import json
import pathlib

import pytest

import atml_renderer.cli


TEMPLATE = """<document width="144pt" height="72pt">
	<row height="fill"><col text-align="center" vertical-align="center">Bin A-1</col></row>
</document>
"""


#============================================
def write_template(tmp_path: pathlib.Path, text: str = TEMPLATE) -> pathlib.Path:
	path = tmp_path / "label.atml"
	path.write_text(text, encoding="utf-8")
	return path


#============================================
def test_default_output_path_next_to_template(tmp_path: pathlib.Path, capsys) -> None:
	template_path = write_template(tmp_path)
	assert atml_renderer.cli.main([str(template_path)]) == 0
	output_path = tmp_path / "label.pdf"
	assert output_path.read_bytes().startswith(b"%PDF")
	assert f"Written: {output_path}" in capsys.readouterr().out


#============================================
def test_recording_backend_writes_json(tmp_path: pathlib.Path) -> None:
	template_path = write_template(tmp_path)
	assert atml_renderer.cli.main([str(template_path), "-b", "recording", "-g", "-v"]) == 0
	payload = json.loads((tmp_path / "label.json").read_text())
	assert payload["height"] == 72.0


#============================================
def test_explicit_output_and_compress(tmp_path: pathlib.Path) -> None:
	template_path = write_template(tmp_path)
	output_path = tmp_path / "out" / "custom.pdf"
	output_path.parent.mkdir()
	assert atml_renderer.cli.main([str(template_path), str(output_path), "-c"]) == 0
	assert output_path.exists()


#============================================
def test_errors_exit_with_status_one(tmp_path: pathlib.Path, capsys) -> None:
	"""
	Read, parse, and option errors all exit with status 1.
	"""
	with pytest.raises(SystemExit) as missing:
		atml_renderer.cli.main([str(tmp_path / "missing.atml")])
	assert missing.value.code == 1

	bad_template = write_template(tmp_path, '<document width="10pt"/>')
	with pytest.raises(SystemExit) as parse_failure:
		atml_renderer.cli.main([str(bad_template)])
	assert parse_failure.value.code == 1
	assert "Missing required attribute" in capsys.readouterr().err
	assert not (tmp_path / "label.pdf").exists()

	good_template = write_template(tmp_path)
	with pytest.raises(SystemExit) as font_failure:
		atml_renderer.cli.main([str(good_template), "-f", "NoPathHere"])
	assert font_failure.value.code == 1


#============================================
def test_parse_font_specs() -> None:
	fonts = atml_renderer.cli.parse_font_specs(["Label=/fonts/label.ttf", "Mono=a=b.ttf"])
	assert fonts == {"Label": "/fonts/label.ttf", "Mono": "a=b.ttf"}

"""
Backend that records draw calls instead of drawing them.

Useful for inspecting layout output and for tests. The export format is a
JSON document holding the page size and the ordered list of operations.
"""

# Standard Library
import json
import pathlib

# local repo modules
import atml_renderer as atr
import atml_renderer.backend


CanvasBackend = atr.backend.CanvasBackend


class RecordingBackend(CanvasBackend):
	name = "recording"

	def __init__(self, width, height, options=None, fonts=None) -> None:
		super().__init__(width, height, options, fonts)
		self.ops: list[dict] = []

	def record(self, op: str, **values) -> None:
		entry = {"op": op}
		entry.update(values)
		self.ops.append(entry)

	def set_font(self, family, size, bold=False) -> None:
		self.record(
			"set_font",
			family=family,
			size=size,
			bold=bold,
			font_name=self.fonts.resolve(family, bold),
		)

	def text_wrap(self, top_left, box_size, text, align="left") -> None:
		self.record("text_wrap", top_left=list(top_left), box_size=list(box_size), text=text, align=align)

	def set_line_leading(self, leading) -> None:
		self.record("set_line_leading", leading=leading)

	def add_image(self, image_ref, bottom_left, size) -> None:
		self.record(
			"add_image",
			image_ref=str(image_ref),
			exists=pathlib.Path(image_ref).is_file(),
			bottom_left=list(bottom_left),
			size=list(size),
		)

	def set_stroke_color(self, rgb) -> None:
		self.record("set_stroke_color", rgb=list(rgb))

	def set_line_width(self, width) -> None:
		self.record("set_line_width", width=width)

	def line(self, start, end, style="solid") -> None:
		self.record("line", start=list(start), end=list(end), style=style)

	def stroke(self) -> None:
		self.record("stroke")

	def ops_named(self, op: str) -> list[dict]:
		return [entry for entry in self.ops if entry["op"] == op]

	def export(self) -> bytes:
		payload = {
			"width": self.width,
			"height": self.height,
			"ops": self.ops,
		}
		return json.dumps(payload, indent=2).encode("utf-8")

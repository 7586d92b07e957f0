"""
Canvas backend interface.

The box renderer only talks to this interface. Coordinates are canvas
points with a bottom-left origin. Each backend instance owns the state of
one page and is cleaned up by whoever created it.
"""

# Standard Library
import abc
import pathlib

# local repo modules
import atml_renderer as atr
import atml_renderer.fonts


FontRegistry = atr.fonts.FontRegistry


class CanvasBackend(abc.ABC):
	"""
	Abstract drawing surface for a single fixed-size page.
	"""

	name = ""

	def __init__(
		self,
		width: float,
		height: float,
		options: dict | None = None,
		fonts: FontRegistry | None = None,
	) -> None:
		self.width = float(width)
		self.height = float(height)
		self.options = dict(options or {})
		self.fonts = fonts if fonts is not None else FontRegistry()

	@abc.abstractmethod
	def set_font(self, family: str, size: float, bold: bool = False) -> None:
		"""
		Select the font for following text calls.

		Args:
			family: Template font family.
			size: Font size in points.
			bold: Bold weight flag.
		"""

	@abc.abstractmethod
	def text_wrap(
		self,
		top_left: tuple[float, float],
		box_size: tuple[float, float],
		text: str,
		align: str = "left",
	) -> None:
		"""
		Draw text wrapped inside a box.

		Args:
			top_left: Canvas (x, y) of the box's top-left corner.
			box_size: (width, height) of the box.
			text: Text run, may contain newlines.
			align: "left", "center", or "right".
		"""

	@abc.abstractmethod
	def set_line_leading(self, leading: float) -> None:
		pass

	@abc.abstractmethod
	def add_image(
		self,
		image_ref: str,
		bottom_left: tuple[float, float],
		size: tuple[float, float],
	) -> None:
		"""
		Draw an image file stretched to a box.

		Args:
			image_ref: Image file path.
			bottom_left: Canvas (x, y) of the box's bottom-left corner.
			size: (width, height) of the box.
		"""

	@abc.abstractmethod
	def set_stroke_color(self, rgb: tuple[float, float, float]) -> None:
		pass

	@abc.abstractmethod
	def set_line_width(self, width: float) -> None:
		pass

	@abc.abstractmethod
	def line(
		self,
		start: tuple[float, float],
		end: tuple[float, float],
		style: str = "solid",
	) -> None:
		"""
		Add a line segment to the current path.

		Args:
			start: Canvas (x, y) start point.
			end: Canvas (x, y) end point.
			style: Border style hint ("solid", "dashed", "dotted").
		"""

	@abc.abstractmethod
	def stroke(self) -> None:
		pass

	@abc.abstractmethod
	def export(self) -> bytes:
		"""
		Finish the page and return the encoded document.

		Returns:
			Document bytes.
		"""

	def size(self) -> tuple[float, float]:
		return (self.width, self.height)

	def write_to(self, path: "str | pathlib.Path") -> None:
		"""
		Write the exported document to a file.

		Args:
			path: Destination path.
		"""
		pathlib.Path(path).write_bytes(self.export())

	def cleanup(self) -> None:
		pass

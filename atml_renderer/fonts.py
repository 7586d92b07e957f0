"""
Font cascade and font registry.
"""

# Standard Library
import pathlib

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

# local repo modules
import atml_renderer as atr
import atml_renderer.config
import atml_renderer.geometry


FontContext = atr.geometry.FontContext
FontOverride = atr.geometry.FontOverride

BUILTIN_FONT_ALIASES = atr.config.BUILTIN_FONT_ALIASES
FALLBACK_FONT_REGULAR = atr.config.FALLBACK_FONT_REGULAR
FALLBACK_FONT_BOLD = atr.config.FALLBACK_FONT_BOLD


#============================================
def merge_font(parent: FontContext, override: "FontOverride | FontContext | None") -> FontContext:
	"""
	Merge an inherited font context with a box's own declarations.

	Args:
		parent: Inherited font context.
		override: Partial font declared on the box, or None.

	Returns:
		Effective FontContext.
	"""
	if override is None:
		return parent
	family = override.family if override.family is not None else parent.family
	size = override.size if override.size is not None else parent.size
	weight = override.weight if override.weight is not None else parent.weight
	return FontContext(family=family, size=float(size), weight=weight)


class FontRegistry:
	"""
	Maps template font families onto canvas font names.

	A registry is handed to each backend at construction time, so two
	backends can carry different font sets side by side.
	"""

	def __init__(
		self,
		fallback_regular: str = FALLBACK_FONT_REGULAR,
		fallback_bold: str = FALLBACK_FONT_BOLD,
	) -> None:
		self.fallback_regular = fallback_regular
		self.fallback_bold = fallback_bold
		self.fonts: dict[str, str] = {}

	def register(self, name: str, path: "str | pathlib.Path") -> bool:
		"""
		Register a TrueType font file under a family name.

		Args:
			name: Family name used in templates.
			path: TTF file path.

		Returns:
			True if the font was registered.
		"""
		font_path = pathlib.Path(path)
		if not font_path.is_file():
			print(f"Warning: font not found, skipping: {name} at {font_path}")
			return False
		font = reportlab.pdfbase.ttfonts.TTFont(name, str(font_path))
		reportlab.pdfbase.pdfmetrics.registerFont(font)
		self.fonts[name] = str(font_path)
		return True

	def register_directory(self, directory: "str | pathlib.Path") -> list[str]:
		"""
		Register every TTF file in a directory using its file stem.

		Args:
			directory: Directory holding .ttf files.

		Returns:
			Registered font names.
		"""
		folder = pathlib.Path(directory)
		if not folder.is_dir():
			return []
		names: list[str] = []
		for font_path in sorted(folder.glob("*.ttf")):
			if self.register(font_path.stem, font_path):
				names.append(font_path.stem)
		return names

	def resolve(self, family: str, bold: bool = False) -> str:
		"""
		Resolve a family name to a canvas font name.

		Lookup order: exact registered name, case-insensitive registered
		name, built-in PDF font alias, then the fallback font.

		Args:
			family: Template font family.
			bold: Bold weight flag.

		Returns:
			Canvas font name.
		"""
		if family in self.fonts:
			return family
		lowered = family.lower()
		for name in self.fonts:
			if name.lower() == lowered:
				return name
		alias = BUILTIN_FONT_ALIASES.get((lowered, bold))
		if alias is not None:
			return alias
		if bold:
			return self.fallback_bold
		return self.fallback_regular


#============================================
def build_font_registry(
	fonts: "FontRegistry | dict[str, str] | None",
	font_dirs: "list[str] | None" = None,
) -> FontRegistry:
	"""
	Build a FontRegistry from caller configuration.

	Args:
		fonts: Existing registry, mapping of name to TTF path, or None.
		font_dirs: Optional directories of TTF files.

	Returns:
		FontRegistry.
	"""
	if isinstance(fonts, FontRegistry):
		registry = fonts
	else:
		registry = FontRegistry()
		for name, path in (fonts or {}).items():
			registry.register(name, path)
	for directory in font_dirs or []:
		registry.register_directory(directory)
	return registry

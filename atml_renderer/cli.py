"""
CLI entry point for rendering ATML templates.
"""

# Standard Library
import argparse
import pathlib
import sys

# local repo modules
import atml_renderer as atr
import atml_renderer.backends
import atml_renderer.config
import atml_renderer.errors
import atml_renderer.fonts
import atml_renderer.pipeline


RenderOptions = atr.config.RenderOptions
AtmlError = atr.errors.AtmlError

DEFAULT_BACKEND = atr.config.DEFAULT_BACKEND
BACKEND_SUFFIXES = {
	"reportlab": ".pdf",
	"recording": ".json",
}


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, or None for sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render an ATML template to PDF.")
	parser.add_argument("template", help="ATML template file.")
	parser.add_argument("output", nargs="?", default=None, help="Output path (default: template path with .pdf).")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument(
		"-b", "--backend", dest="backend", default=DEFAULT_BACKEND,
		choices=sorted(atr.backends.BACKENDS), help="Canvas backend.",
	)
	output_group.add_argument("-c", "--compress", dest="compress", action="store_true", help="Compress page streams.")

	font_group = parser.add_argument_group("Fonts")
	font_group.add_argument(
		"-f", "--font", dest="fonts", action="append", default=[],
		metavar="NAME=PATH", help="Register a TTF font under a family name.",
	)
	font_group.add_argument(
		"-F", "--font-dir", dest="font_dirs", action="append", default=[],
		metavar="DIR", help="Register every TTF font in a directory.",
	)

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument(
		"-g", "--glyph-metrics", dest="measure", action="store_const", const="glyph",
		help="Measure text with font metrics instead of the character-width estimate.",
	)
	behavior_group.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Print stage timings.")

	parser.set_defaults(measure="heuristic", compress=False, verbose=False)

	args = parser.parse_args(argv)
	return args


#============================================
def default_output_path(template_path: pathlib.Path, backend: str) -> pathlib.Path:
	suffix = BACKEND_SUFFIXES.get(backend, ".pdf")
	return template_path.with_suffix(suffix)


#============================================
def parse_font_specs(specs: list[str]) -> dict[str, str]:
	"""
	Parse NAME=PATH font arguments.

	Args:
		specs: Raw argument values.

	Returns:
		Mapping of font name to path.
	"""
	fonts: dict[str, str] = {}
	for spec in specs:
		name, separator, path = spec.partition("=")
		if not separator or not name or not path:
			raise ValueError(f"Invalid font argument (expected NAME=PATH): {spec}")
		fonts[name] = path
	return fonts


#============================================
def build_options(args: argparse.Namespace) -> RenderOptions:
	"""
	Build render options from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderOptions.
	"""
	registry = atr.fonts.build_font_registry(parse_font_specs(args.fonts), args.font_dirs)
	return RenderOptions(
		backend=args.backend,
		compress=args.compress,
		fonts=registry,
		measure=args.measure,
		verbose=args.verbose,
	)


#============================================
def run(args: argparse.Namespace) -> int:
	"""
	Render one template file.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit code.
	"""
	template_path = pathlib.Path(args.template)
	output_path = pathlib.Path(args.output) if args.output else default_output_path(template_path, args.backend)
	try:
		markup = template_path.read_text(encoding="utf-8")
	except OSError as error:
		print(f"Error: could not read {template_path}: {error}", file=sys.stderr)
		return 1

	print(f"Template: {template_path}")
	print(f"Backend: {args.backend}")
	try:
		options = build_options(args)
		atr.pipeline.render(markup, output_path, options)
	except (AtmlError, ValueError) as error:
		print(f"Error: {error}", file=sys.stderr)
		return 1
	print(f"Written: {output_path}")
	return 0


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	exit_code = run(args)
	if exit_code != 0:
		sys.exit(exit_code)
	return exit_code

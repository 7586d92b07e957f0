"""
Top-level template rendering entry points.
"""

# Standard Library
import pathlib
import time

# local repo modules
import atml_renderer as atr
import atml_renderer.backends
import atml_renderer.config
import atml_renderer.errors
import atml_renderer.fonts
import atml_renderer.layout
import atml_renderer.markup
import atml_renderer.measure
import atml_renderer.render


RenderOptions = atr.config.RenderOptions
AtmlError = atr.errors.AtmlError
RenderError = atr.errors.RenderError


#============================================
def render(
	markup: "str | bytes",
	destination_path: "str | pathlib.Path",
	options: "RenderOptions | dict | None" = None,
) -> None:
	"""
	Render template markup to a file.

	The destination is written only after the whole document has been
	rendered and exported.

	Args:
		markup: ATML template text.
		destination_path: Output file path.
		options: RenderOptions or mapping of option names to values.

	Raises:
		ParseError, LayoutError, RenderError: From the failing stage.
	"""
	run_pipeline(markup, options, destination_path)


#============================================
def render_to_bytes(
	markup: "str | bytes",
	options: "RenderOptions | dict | None" = None,
) -> bytes:
	"""
	Render template markup to document bytes.

	Args:
		markup: ATML template text.
		options: RenderOptions or mapping of option names to values.

	Returns:
		Exported document bytes (PDF for the default backend).
	"""
	return run_pipeline(markup, options, None)


#============================================
def run_pipeline(
	markup: "str | bytes",
	options: "RenderOptions | dict | None",
	destination_path: "str | pathlib.Path | None",
) -> bytes:
	"""
	Parse, resolve, and render a template with one backend instance.

	Args:
		markup: ATML template text.
		options: Caller options.
		destination_path: Optional output file path.

	Returns:
		Exported document bytes.
	"""
	settings = atr.config.build_render_options(options)
	fonts = atr.fonts.build_font_registry(settings.fonts)
	measure = atr.measure.build_measure(settings.measure, fonts)
	backend_class = atr.backends.get_backend(settings.backend)

	start_time = time.perf_counter()
	doc = atr.markup.parse_markup(markup)
	parse_end = time.perf_counter()
	resolved = atr.layout.resolve(doc, measure)
	layout_end = time.perf_counter()

	backend_options = dict(settings.backend_options)
	backend_options["compress"] = settings.compress
	try:
		backend = backend_class(resolved.width, resolved.height, backend_options, fonts)
	except Exception as error:
		raise RenderError(f"Render error: could not create {backend_class.__name__}: {error}") from error

	try:
		atr.render.render_document(resolved, backend, measure)
		data = backend.export()
		if destination_path is not None:
			backend.write_to(destination_path)
	except AtmlError:
		raise
	except Exception as error:
		raise RenderError(f"Render error: {error}") from error
	finally:
		backend.cleanup()
	render_end = time.perf_counter()

	if settings.verbose:
		print(f"Backend: {backend_class.name or backend_class.__name__}")
		print(f"Page size: {resolved.width:.2f} x {resolved.height:.2f} pt")
		print(
			"Timing: parse={:.3f}s layout={:.3f}s render={:.3f}s total={:.3f}s".format(
				parse_end - start_time,
				layout_end - parse_end,
				render_end - layout_end,
				render_end - start_time,
			)
		)
	return data

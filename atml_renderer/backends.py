"""
Backend name registry.
"""

# local repo modules
import atml_renderer as atr
import atml_renderer.backend
import atml_renderer.config
import atml_renderer.recording_backend
import atml_renderer.reportlab_backend


CanvasBackend = atr.backend.CanvasBackend

BACKENDS = {
	"reportlab": atr.reportlab_backend.ReportLabBackend,
	"recording": atr.recording_backend.RecordingBackend,
}


#============================================
def get_backend(name_or_class: "str | type | None") -> type:
	"""
	Look up a backend class.

	Args:
		name_or_class: Registered name, a CanvasBackend subclass, or None
			for the default backend.

	Returns:
		CanvasBackend subclass.
	"""
	if name_or_class is None:
		return BACKENDS[atr.config.DEFAULT_BACKEND]
	if isinstance(name_or_class, type) and issubclass(name_or_class, CanvasBackend):
		return name_or_class
	if isinstance(name_or_class, str) and name_or_class in BACKENDS:
		return BACKENDS[name_or_class]
	known = ", ".join(sorted(BACKENDS))
	raise ValueError(f"Unknown backend: {name_or_class!r} (known: {known})")

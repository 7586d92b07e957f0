"""
Error types raised by each pipeline stage.
"""


class AtmlError(Exception):
	"""
	Base class for all template rendering failures.
	"""


class ParseError(AtmlError):
	"""
	Malformed markup, nesting violations, or missing required attributes.
	"""


class LayoutError(AtmlError):
	"""
	Non-document root or a failure while resolving dimensions.
	"""


class RenderError(AtmlError):
	"""
	Canvas backend failure or unrenderable image data.
	"""

class AuditError(Exception):
	"""Base class for failures in the collaborators of a submission."""


class NarrativeError(AuditError):
	"""The language model call failed or returned no usable text."""


class ReportRenderError(AuditError):
	"""The headless browser could not print the report."""


class DeliveryError(AuditError):
	"""The report email could not be sent."""

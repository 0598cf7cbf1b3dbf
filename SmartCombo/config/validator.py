"""Startup configuration validation."""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .settings import Settings

logger = logging.getLogger("SMARTCOMBO.Config")

KNOWN_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
KNOWN_BACKENDS = ("openai", "azure-openai")


@dataclass
class ConfigValidationError:
	"""Represents a configuration validation error."""
	field: str
	message: str
	severity: str = "error"  # "error", "warning"


@dataclass
class ConfigValidationResult:
	"""Outcome of validating a Settings object."""
	errors: List[ConfigValidationError] = field(default_factory=list)

	@property
	def is_valid(self) -> bool:
		return not any(e.severity == "error" for e in self.errors)

	@property
	def warnings(self) -> List[ConfigValidationError]:
		return [e for e in self.errors if e.severity == "warning"]

	@property
	def first_error(self) -> Optional[str]:
		"""Message of the first blocking error, or None when valid."""
		for error in self.errors:
			if error.severity == "error":
				return error.message
		return None

	def get_error_report(self) -> str:
		"""Get formatted error report."""
		if not self.errors:
			return "Configuration is valid."

		errors = [e for e in self.errors if e.severity == "error"]
		report = []

		if errors:
			report.append(f"{len(errors)} configuration errors found:")
			for error in errors:
				report.append(f"   - {error.field}: {error.message}")

		if self.warnings:
			report.append(f"{len(self.warnings)} configuration warnings:")
			for warning in self.warnings:
				report.append(f"   - {warning.field}: {warning.message}")

		return "\n".join(report)


class ConfigValidator:
	"""Validates SmartCombo settings before the app starts serving."""

	def validate(self, settings: Settings) -> ConfigValidationResult:
		"""Validate settings.

		Args:
			settings: Settings to validate

		Returns:
			A result listing every error and warning found
		"""
		result = ConfigValidationResult()
		self._validate_inference(settings, result)
		self._validate_embedding(settings, result)
		self._validate_suggestions(settings, result)
		self._validate_logging(settings, result)

		if result.is_valid:
			logger.info("Configuration validated successfully")
		else:
			logger.warning(f"Configuration issues found:\n{result.get_error_report()}")
		return result

	def _validate_inference(self, settings: Settings, result: ConfigValidationResult) -> None:
		inference = settings.inference
		if inference.backend not in KNOWN_BACKENDS:
			result.errors.append(ConfigValidationError(
				field="inference.backend",
				message=f"Unknown inference backend '{inference.backend}'. Must be one of: {list(KNOWN_BACKENDS)}"
			))
		if not inference.api_key:
			result.errors.append(ConfigValidationError(
				field="inference.api_key",
				message="Missing required config value inference.api_key. "
				"Set it in RepoSharedConfig.json or the SMARTCOMBO_API_KEY environment variable."
			))
		if inference.backend == "azure-openai" and not inference.endpoint:
			result.errors.append(ConfigValidationError(
				field="inference.endpoint",
				message="Missing required config value inference.endpoint for azure-openai backend"
			))
		if not inference.deployment_name:
			result.errors.append(ConfigValidationError(
				field="inference.deployment_name",
				message="No deployment_name configured; the backend default model will be used",
				severity="warning"
			))

	def _validate_embedding(self, settings: Settings, result: ConfigValidationResult) -> None:
		if not settings.embedding.model_name:
			result.errors.append(ConfigValidationError(
				field="embedding.model_name",
				message="Embedding model name cannot be empty"
			))
		if not isinstance(settings.embedding.batch_size, int) or settings.embedding.batch_size < 1:
			result.errors.append(ConfigValidationError(
				field="embedding.batch_size",
				message=f"Value {settings.embedding.batch_size} must be a positive integer"
			))

	def _validate_suggestions(self, settings: Settings, result: ConfigValidationResult) -> None:
		suggestions = settings.suggestions
		# Blank or duplicate labels are fatal in CategoryIndex.build
		if not suggestions.categories:
			result.errors.append(ConfigValidationError(
				field="suggestions.categories",
				message="At least one category is required"
			))

		if not isinstance(suggestions.max_results_limit, int) or suggestions.max_results_limit < 1:
			result.errors.append(ConfigValidationError(
				field="suggestions.max_results_limit",
				message=f"Value {suggestions.max_results_limit} must be a positive integer"
			))
		elif not isinstance(suggestions.default_max_results, int) or not (
			1 <= suggestions.default_max_results <= suggestions.max_results_limit
		):
			result.errors.append(ConfigValidationError(
				field="suggestions.default_max_results",
				message=f"Value {suggestions.default_max_results} must be between 1 and {suggestions.max_results_limit}"
			))

	def _validate_logging(self, settings: Settings, result: ConfigValidationResult) -> None:
		if str(settings.logging.level).upper() not in KNOWN_LOG_LEVELS:
			result.errors.append(ConfigValidationError(
				field="logging.level",
				message=f"Invalid value '{settings.logging.level}'. Must be one of: {list(KNOWN_LOG_LEVELS)}",
				severity="warning"
			))
		if settings.logging.format not in ("standard", "json"):
			result.errors.append(ConfigValidationError(
				field="logging.format",
				message=f"Invalid value '{settings.logging.format}'. Must be 'standard' or 'json'",
				severity="warning"
			))


def validate_settings(settings: Settings) -> ConfigValidationResult:
	"""Validate settings on startup."""
	return ConfigValidator().validate(settings)

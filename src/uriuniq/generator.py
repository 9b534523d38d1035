import logging

from uriuniq.charsets import resolve_charset
from uriuniq.models import (
    Advisory,
    AdvisoryCode,
    GenerateOptions,
    GenerationResult,
    GeneratorDefaults,
    add_advisory,
)
from uriuniq.sampler import EntropySource, sample_string

logger = logging.getLogger(__name__)

_DEFAULTS = GeneratorDefaults()


def _effective_length(
    options: GenerateOptions,
    defaults: GeneratorDefaults,
    advisories: list[Advisory],
) -> int:
    if options.length is None:
        return defaults.length
    if options.length <= 0:
        logger.debug(
            "invalid length %d, using default %d",
            options.length,
            defaults.length,
        )
        add_advisory(
            advisories,
            AdvisoryCode.DEFAULT_LENGTH_SUBSTITUTED,
            f"Invalid length {options.length} provided, using default "
            f"length {defaults.length}",
            options.length,
        )
        return defaults.length
    return options.length


def _effective_max_bad_reads(
    options: GenerateOptions,
    defaults: GeneratorDefaults,
    advisories: list[Advisory],
) -> int:
    if options.max_bad_reads is None:
        return defaults.max_bad_reads
    if options.max_bad_reads <= 0:
        logger.debug(
            "invalid max_bad_reads %d, using default %d",
            options.max_bad_reads,
            defaults.max_bad_reads,
        )
        add_advisory(
            advisories,
            AdvisoryCode.DEFAULT_MAX_BAD_READS_SUBSTITUTED,
            f"Invalid max_bad_reads {options.max_bad_reads} provided, using "
            f"default {defaults.max_bad_reads}",
            options.max_bad_reads,
        )
        return defaults.max_bad_reads
    return options.max_bad_reads


def generate(
    options: GenerateOptions | None = None,
    *,
    defaults: GeneratorDefaults | None = None,
    entropy: EntropySource | None = None,
) -> GenerationResult:
    """Generate one random URI-safe string.

    Invalid lengths and read budgets fall back to ``defaults`` and are
    reported in ``GenerationResult.warnings``, as are custom charsets with
    characters outside the URI-safe set. Configuration errors are raised
    before any entropy is read.
    """
    if options is None:
        options = GenerateOptions()
    if defaults is None:
        defaults = _DEFAULTS

    advisories: list[Advisory] = []
    length = _effective_length(options, defaults, advisories)
    max_bad_reads = _effective_max_bad_reads(options, defaults, advisories)
    charset = resolve_charset(options, advisories)

    value = sample_string(
        length,
        charset,
        max_bad_reads,
        buffer_size=defaults.buffer_size,
        entropy=entropy,
    )
    return GenerationResult(
        value=value,
        charset=charset,
        length=length,
        warnings=advisories,
    )


def generate_string(
    options: GenerateOptions | None = None,
    *,
    defaults: GeneratorDefaults | None = None,
    entropy: EntropySource | None = None,
) -> str:
    return generate(options, defaults=defaults, entropy=entropy).value

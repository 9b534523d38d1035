import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, TextIO

import srsly
import typer
from pydantic import ValidationError

from uriuniq.charsets import resolve_charset
from uriuniq.errors import UriuniqError
from uriuniq.generator import generate as generate_value
from uriuniq.models import (
    Advisory,
    GenerateOptions,
    GenerationResult,
    UriSafetyPolicy,
)
from uriuniq.presets import get_preset, get_preset_names

app = typer.Typer(help="Generate random URI-safe strings.")

_CHARSET_OPTION_NAMES = (
    "custom_charset",
    "exclude_numeric",
    "exclude_lowercase",
    "exclude_uppercase",
)

LengthOption = Annotated[
    int | None,
    typer.Option(
        "--length",
        "-l",
        help="Output length; values <= 0 fall back to the default (16)",
    ),
]
ExcludeNumericOption = Annotated[
    bool, typer.Option("--exclude-numeric", help="Drop digits")
]
ExcludeLowercaseOption = Annotated[
    bool, typer.Option("--exclude-lowercase", help="Drop lowercase letters")
]
ExcludeUppercaseOption = Annotated[
    bool, typer.Option("--exclude-uppercase", help="Drop uppercase letters")
]
CharsetOption = Annotated[
    str | None,
    typer.Option("--charset", "-c", help="Custom charset, used verbatim"),
]
PresetOption = Annotated[
    str | None,
    typer.Option("--preset", "-p", help="Named charset preset"),
]
StrictOption = Annotated[
    bool,
    typer.Option(
        "--strict", help="Reject custom charsets that are not URI-safe"
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        exists=True,
        dir_okay=False,
        help="JSON file with generation options",
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Enable debug logging")
]


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _load_config(path: Path) -> dict[str, Any]:
    try:
        raw = srsly.read_json(path)
    except ValueError as err:
        raise typer.BadParameter(
            f"Invalid config file '{path}': malformed JSON ({err})"
        ) from err
    if not isinstance(raw, dict):
        raise typer.BadParameter(
            f"Invalid config file '{path}': expected a JSON object"
        )
    return raw


def _render_validation_error(err: ValidationError) -> str:
    first_error = err.errors(include_url=False)[0]
    loc = ".".join(str(item) for item in first_error["loc"])
    message = first_error["msg"]
    if loc:
        return f"invalid options at '{loc}': {message}"
    return f"invalid options: {message}"


def _build_options(
    *,
    config: Path | None,
    preset: str | None,
    length: int | None,
    exclude_numeric: bool,
    exclude_lowercase: bool,
    exclude_uppercase: bool,
    charset: str | None,
    max_bad_reads: int | None,
    strict: bool,
) -> GenerateOptions:
    """Merge config file, preset and flags (later wins) into options."""
    manual_charset: dict[str, Any] = {}
    if charset is not None:
        manual_charset["custom_charset"] = charset
    if exclude_numeric:
        manual_charset["exclude_numeric"] = True
    if exclude_lowercase:
        manual_charset["exclude_lowercase"] = True
    if exclude_uppercase:
        manual_charset["exclude_uppercase"] = True

    merged: dict[str, Any] = {}
    if config is not None:
        merged.update(_load_config(config))

    if preset is not None:
        if manual_charset:
            provided = [
                "--charset" if key == "custom_charset"
                else f"--{key.replace('_', '-')}"
                for key in manual_charset
            ]
            raise typer.BadParameter(
                "--preset cannot be combined with charset options: "
                f"{', '.join(provided)}"
            )
        try:
            selected = get_preset(preset)
        except ValueError as err:
            raise typer.BadParameter(str(err)) from err
        for key in _CHARSET_OPTION_NAMES:
            merged.pop(key, None)
        merged.update(selected.options_overrides)

    merged.update(manual_charset)
    if length is not None:
        merged["length"] = length
    if max_bad_reads is not None:
        merged["max_bad_reads"] = max_bad_reads
    if strict:
        merged["uri_safety"] = UriSafetyPolicy.REJECT

    try:
        return GenerateOptions.model_validate(merged)
    except ValidationError as err:
        raise typer.BadParameter(_render_validation_error(err)) from err


def _safe_unlink(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        return


@contextmanager
def _atomic_output(output: Path) -> Iterator[TextIO]:
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output.name}.",
        suffix=".tmp",
        dir=output.parent,
    )
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            yield handle
        os.replace(tmp, output)
    except Exception:
        _safe_unlink(tmp)
        raise


def _write_result_line(handle: TextIO, result: GenerationResult) -> None:
    handle.write(srsly.json_dumps(result.model_dump(mode="json")))
    handle.write("\n")


def _echo_advisories(advisories: list[Advisory]) -> None:
    seen: set[tuple[str, str]] = set()
    for advisory in advisories:
        key = (advisory.code.value, advisory.message)
        if key in seen:
            continue
        seen.add(key)
        typer.echo(f"Warning: {advisory.message}", err=True)


@app.command()
def generate(
    count: Annotated[
        int, typer.Option("--count", "-n", help="Number of values")
    ] = 1,
    length: LengthOption = None,
    exclude_numeric: ExcludeNumericOption = False,
    exclude_lowercase: ExcludeLowercaseOption = False,
    exclude_uppercase: ExcludeUppercaseOption = False,
    charset: CharsetOption = None,
    preset: PresetOption = None,
    max_bad_reads: Annotated[
        int | None,
        typer.Option(
            "--max-bad-reads",
            help="Entropy read budget; values <= 0 fall back to 150",
        ),
    ] = None,
    strict: StrictOption = False,
    config: ConfigOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output JSONL file"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Generate random URI-safe strings."""
    _configure_logging(verbose)
    if count < 1:
        raise _fail("--count must be >= 1")

    try:
        options = _build_options(
            config=config,
            preset=preset,
            length=length,
            exclude_numeric=exclude_numeric,
            exclude_lowercase=exclude_lowercase,
            exclude_uppercase=exclude_uppercase,
            charset=charset,
            max_bad_reads=max_bad_reads,
            strict=strict,
        )
    except typer.BadParameter as err:
        raise _fail(str(err)) from err

    advisories: list[Advisory] = []
    try:
        if output is None:
            for _ in range(count):
                result = generate_value(options)
                advisories.extend(result.warnings)
                typer.echo(result.value)
        else:
            with _atomic_output(output) as handle:
                for _ in range(count):
                    result = generate_value(options)
                    advisories.extend(result.warnings)
                    _write_result_line(handle, result)
    except UriuniqError as err:
        raise _fail(str(err)) from err
    except OSError as err:
        raise _fail(f"file operation failed: {err}") from err

    _echo_advisories(advisories)
    if output is not None:
        typer.echo(f"Generated {count} values to {output}")


@app.command()
def charset(
    exclude_numeric: ExcludeNumericOption = False,
    exclude_lowercase: ExcludeLowercaseOption = False,
    exclude_uppercase: ExcludeUppercaseOption = False,
    charset: CharsetOption = None,
    preset: PresetOption = None,
    strict: StrictOption = False,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the alphabet the given options resolve to."""
    _configure_logging(verbose)
    try:
        options = _build_options(
            config=config,
            preset=preset,
            length=None,
            exclude_numeric=exclude_numeric,
            exclude_lowercase=exclude_lowercase,
            exclude_uppercase=exclude_uppercase,
            charset=charset,
            max_bad_reads=None,
            strict=strict,
        )
    except typer.BadParameter as err:
        raise _fail(str(err)) from err

    advisories: list[Advisory] = []
    try:
        resolved = resolve_charset(options, advisories)
    except UriuniqError as err:
        raise _fail(str(err)) from err

    _echo_advisories(advisories)
    typer.echo(resolved)
    typer.echo(f"size: {len(resolved)}")


@app.command()
def presets() -> None:
    """List named charset presets."""
    for name in get_preset_names():
        typer.echo(f"{name}: {get_preset(name).description}")

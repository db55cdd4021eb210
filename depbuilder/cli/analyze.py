"""Analyze and status command implementations."""

import json
import logging
from pathlib import Path

from depbuilder.cli.common import prepare
from depbuilder.errors import BuilderError
from depbuilder.module import dependency_locator

logger = logging.getLogger("depbuilder.cli.analyze")


def analyze_command(args) -> int:
    """Execute analyze command.

    Optionally builds the module first when it has not been built yet (or
    always, with ``--force``), then writes the discovered dependencies as
    a JSON list to ``--output`` or stdout.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code.
    """
    try:
        module, builder = prepare(args)
        force = getattr(args, "force", False)
        if getattr(args, "build", False) and (force or not builder.is_built(module)):
            builder.build(module, force=force)
        elif not builder.is_built(module):
            logger.warning(
                "%s does not look built; results may be empty (use --build)",
                module.dir,
            )
        dependencies = builder.analyze(module)
    except (BuilderError, FileNotFoundError, KeyError, ValueError) as e:
        logger.error("Analysis failed: %s", e)
        return 1

    payload = [{**dep.to_dict(), "locator": dependency_locator(dep)} for dep in dependencies]
    text = json.dumps(payload, ensure_ascii=False, indent=2)

    output = getattr(args, "output", None)
    if output:
        output_path = Path(output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s: %s", output_path, e)
            return 1
        logger.info("Wrote %d dependencies to %s", len(payload), output_path)
    else:
        print(text)
    return 0


def status_command(args) -> int:
    """Print whether the module has been built.

    Returns:
        int: 0 when built, 2 when not built, 1 on error.
    """
    try:
        module, builder = prepare(args, initialize=False)
        built = builder.is_built(module)
    except (BuilderError, FileNotFoundError, KeyError, ValueError) as e:
        logger.error("Status check failed: %s", e)
        return 1

    print(f"{module.name}: {'built' if built else 'not built'}")
    return 0 if built else 2

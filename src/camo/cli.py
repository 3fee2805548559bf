"""
Command-line interface and entry points for camo.

This module provides the public API that build scripts call to turn Python
declarations into TypeScript (or another registered backend). Declarations
are written to stdout unless an output file is configured; logs go to stderr.

Note: YAML configuration files need PyYAML, which is an optional extra
(`pip install camo[yaml]`). JSON configuration works out of the box.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from camo.backends.registry import BackendRegistry
from camo.bootstrap import load_builtin_backends, load_modules, resolve_target
from camo.core.logger import configure_logging, get_logger
from camo.derive.derive import derive
from camo.exporter import run_export
from camo.models.export_config import ExportConfig

logger = get_logger(__name__)


def _load_config_file(config_path: str) -> Dict[str, Any]:
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, "r") as f:
        if config_file.suffix == ".json":
            return json.load(f)
        if config_file.suffix in (".yaml", ".yml"):
            try:
                import yaml
            except ImportError:
                raise ImportError(
                    "PyYAML required for YAML configs. "
                    "Install with: pip install pyyaml"
                )
            return yaml.safe_load(f)
    raise ValueError(
        f"Unsupported config format: {config_file.suffix}. "
        "Use .json or .yaml"
    )


def main(
    config_path: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    *,
    log_level: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Main entry point for an export run.

    Can be called with either:
    - A config file path (JSON/YAML)
    - A config dictionary (programmatic)

    Args:
        config_path: Path to JSON/YAML configuration file
        config_dict: Direct configuration dictionary
        log_level: Overrides the `log_level` of the configuration

    Returns:
        Execution result with status, exported declaration names and the
        rendered text

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If neither config_path nor config_dict provided
        Exception: If the export fails

    Example:
        >>> from camo.cli import main
        >>> result = main(config_dict={"modules": ["myapp.api.types"]})
        >>> print(result["text"])
    """
    try:
        if config_dict:
            config = config_dict
            logger.info("Using provided config dictionary")
        elif config_path:
            config = _load_config_file(config_path)
            logger.info(f"Loaded config from {config_path}")
        else:
            raise ValueError(
                "Either config_path or config_dict must be provided"
            )

        if log_level:
            config = {**config, "log_level": log_level}

        export_name = config.get("name") or "camo-export"
        logger.info(f"Starting export: {export_name}")

        outcome = run_export(config)

        result: Dict[str, Any] = {
            "status": "success",
            "name": outcome.name,
            "backend": outcome.backend,
            "output": outcome.output,
            "declarations": outcome.declarations,
            "text": outcome.text,
        }

        logger.info(f"Export completed: {len(outcome.declarations)} declarations")
        return result

    except Exception as e:
        logger.error(f"Export failed: {str(e)}")
        raise


def validate_config(config_path: str) -> bool:
    """
    Validate configuration without rendering anything.

    Checks the schema, that the backend is registered, and that every module
    and target can be imported.

    Args:
        config_path: Path to configuration file

    Returns:
        True if configuration is valid

    Raises:
        Exception: If configuration is invalid

    Example:
        >>> validate_config("/path/to/camo.json")
        True
    """
    try:
        config = _load_config_file(config_path)
        logger.info(f"Validating config: {config_path}")

        cfg = ExportConfig.model_validate(config)

        load_builtin_backends()
        _ = BackendRegistry.get(cfg.backend)
        _ = load_modules(cfg.modules)
        for target in cfg.targets:
            _ = resolve_target(target)

        logger.info("Configuration is valid")
        return True

    except Exception as e:
        logger.error(f"Config validation failed: {str(e)}")
        raise


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="camo",
        description="Export Python type declarations to TypeScript"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to execute"
    )

    # 'run' subcommand
    run_parser = subparsers.add_parser(
        "run",
        help="Run an export described by a configuration file"
    )
    run_parser.add_argument(
        "config",
        help="Path to configuration file (JSON or YAML)"
    )
    run_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    # 'validate' subcommand
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate configuration without exporting"
    )
    validate_parser.add_argument(
        "config",
        help="Path to configuration file (JSON or YAML)"
    )

    # 'export' subcommand
    export_parser = subparsers.add_parser(
        "export",
        help="Export the @camo declarations of one or more modules"
    )
    export_parser.add_argument(
        "modules",
        nargs="*",
        help="Modules to scan, e.g. myapp.api.types"
    )
    export_parser.add_argument(
        "--target", "-t",
        action="append",
        default=[],
        dest="targets",
        help="Extra declaration as package.module:Name (repeatable)"
    )
    export_parser.add_argument(
        "--output", "-o",
        help="Write to this file instead of stdout"
    )
    export_parser.add_argument(
        "--backend", "-b",
        default="typescript",
        help="Backend name (default: typescript)"
    )
    export_parser.add_argument(
        "--export-all",
        action="store_true",
        help="Mark every declaration as exported"
    )
    export_parser.add_argument(
        "--on-duplicate",
        choices=["fail", "warn", "skip"],
        default="fail",
        help="What to do when two declarations share a name"
    )
    export_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    # 'inspect' subcommand
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the syntax tree derived for one declaration"
    )
    inspect_parser.add_argument(
        "target",
        help="Declaration as package.module:Name"
    )

    return parser


def cli(argv: Optional[List[str]] = None) -> None:
    """
    Command-line interface for camo.

    Supports subcommands:
    - run: Export using a configuration file
    - validate: Validate a configuration
    - export: Export modules given on the command line
    - inspect: Show the derived syntax tree of one declaration

    Usage:
        camo run camo.json
        camo validate camo.json
        camo export myapp.api.types -o web/src/types.ts
        camo inspect myapp.api.types:User
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        configure_logging("DEBUG")

    if args.command == "run":
        try:
            result = main(
                config_path=args.config,
                log_level="DEBUG" if args.verbose else None,
            )
            if result.get("output") is None:
                sys.stdout.write(result["text"])
            sys.exit(0 if result.get("status") == "success" else 1)
        except Exception as e:
            logger.error(f"Export failed: {e}")
            sys.exit(1)

    elif args.command == "validate":
        try:
            validate_config(args.config)
            sys.exit(0)
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            sys.exit(1)

    elif args.command == "export":
        config: Dict[str, Any] = {
            "modules": args.modules,
            "targets": args.targets,
            "backend": args.backend,
            "export_all": args.export_all,
            "duplicate_policy": args.on_duplicate,
            "output": args.output,
            "log_level": "DEBUG" if args.verbose else "INFO",
        }
        try:
            result = main(config_dict=config)
            if result.get("output") is None:
                sys.stdout.write(result["text"])
            sys.exit(0)
        except Exception as e:
            logger.error(f"Export failed: {e}")
            sys.exit(1)

    elif args.command == "inspect":
        try:
            container = derive(resolve_target(args.target))
            sys.stdout.write(container.model_dump_json(indent=2) + "\n")
            sys.exit(0)
        except Exception as e:
            logger.error(f"Inspect failed: {e}")
            sys.exit(1)

    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    cli()

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import ProjectConfig, config_path, load_config, parse_file_mode
from .errors import ConfigError, CvgenUserError
from .generator import ConversionConvertibleGenerator
from .logsetup import setup_logging
from .registry import KEYING_MODES
from .report_schema import build_report
from .types import ResourceDescriptor
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cvgen",
        description="Conversion function generator for spoke API versions",
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Shared arguments for all commands
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--root", type=Path, default=None, help="project root (default: current directory)")
        sp.add_argument("--config", type=Path, default=None, help="config file (default: <root>/cvgen.yaml)")
        sp.add_argument("--group", help="API group, e.g. s3.aws.upbound.io")
        sp.add_argument("--hub", dest="hub_version", help="hub API version, e.g. v1beta1")
        sp.add_argument(
            "--resource",
            action="append",
            metavar="SHORTGROUP.KIND",
            help="extra resource descriptor (can be given several times)",
        )
        sp.add_argument("--license-header", help="license header file (relative to root)")
        sp.add_argument("--template", help="template id or template file path")
        sp.add_argument("--registry-keying", choices=list(KEYING_MODES), help="registry key scheme")
        sp.add_argument("--file-mode", help="permission bits of generated files, octal (e.g. 0644)")
        sp.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")

    sp_gen = sub.add_parser("generate", help="write conversion functions, print JSON report")
    add_common(sp_gen)

    sp_plan = sub.add_parser("plan", help="dry run: print JSON report, write nothing")
    add_common(sp_plan)

    sp_list = sub.add_parser("list", help="lists (JSON)")
    sp_list.add_argument("what", choices=["versions", "templates"], help="what to list")
    add_common(sp_list)

    return p


def _parse_resources(specs: Optional[List[str]]) -> List[ResourceDescriptor]:
    """Parse 'shortgroup.Kind' specs."""
    out: List[ResourceDescriptor] = []
    for spec in specs or []:
        short_group, sep, kind = spec.partition(".")
        if not sep or not short_group.strip() or not kind.strip():
            raise ValueError(f"Invalid resource '{spec}'. Expected 'shortgroup.Kind'")
        out.append(ResourceDescriptor(kind=kind.strip(), short_group=short_group.strip()))
    return out


def _resolve_config(ns: argparse.Namespace, root: Path) -> ProjectConfig:
    """
    Config file values with command line overrides.

    Without a config file, --group and --hub are enough to run.
    """
    path = config_path(root, ns.config)
    if ns.config is not None or path.is_file():
        cfg = load_config(root, ns.config)
    elif ns.group and ns.hub_version:
        cfg = ProjectConfig(group=ns.group, hub_version=ns.hub_version)
    else:
        raise ConfigError(path, "file not found (or pass --group and --hub)")

    file_mode = parse_file_mode(ns.file_mode) if ns.file_mode is not None else None

    cfg = cfg.with_overrides(
        group=ns.group,
        hub_version=ns.hub_version,
        license_header=ns.license_header,
        template=ns.template,
        registry_keying=ns.registry_keying,
        file_mode=file_mode,
    )
    extra = _parse_resources(ns.resource)
    if extra:
        cfg = cfg.with_overrides(resources=list(cfg.resources) + extra)
    return cfg


def _generator(cfg: ProjectConfig, root: Path) -> ConversionConvertibleGenerator:
    return ConversionConvertibleGenerator(
        root=root,
        group=cfg.group,
        hub_version=cfg.hub_version,
        license_header_path=cfg.license_header_path(root),
        template=cfg.template,
        registry_keying=cfg.registry_keying,
        file_mode=cfg.file_mode,
    )


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    setup_logging(verbose=bool(ns.verbose))

    try:
        if ns.cmd == "list" and ns.what == "templates":
            from .template import list_builtin_templates
            sys.stdout.write(json.dumps({"templates": list_builtin_templates()}) + "\n")
            return 0

        root = (ns.root or Path.cwd()).resolve()
        cfg = _resolve_config(ns, root)
        gen = _generator(cfg, root)

        if ns.cmd == "generate":
            result = gen.generate(cfg.resources)
            sys.stdout.write(build_report(result).model_dump_json(by_alias=True) + "\n")
            return 0

        if ns.cmd == "plan":
            result = gen.plan(cfg.resources)
            sys.stdout.write(build_report(result).model_dump_json(by_alias=True) + "\n")
            return 0

        if ns.cmd == "list":
            sys.stdout.write(json.dumps({"versions": gen.spoke_versions()}) + "\n")
            return 0

    except CvgenUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relman.core.config import Config, load_project_config
from relman.core.errors import ErrorCode
from relman.core.project import Project, detect_project, is_project_root
from relman.core.result import Err
from relman.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: Config
    console: ConsoleProtocol


def build_context(project_dir: Path | None = None) -> CLIContext:
    console = RichConsole()

    if project_dir is not None:
        root = project_dir.expanduser().resolve()
        if not is_project_root(root):
            console.error(f"--project '{root}' is not a Tauri project (package.json + src-tauri/)")
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        project = Project(root=root)
    else:
        project_result = detect_project()
        if isinstance(project_result, Err):
            console.error(project_result.error.message)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        project = project_result.value

    config_result = load_project_config(project.root)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(project=project, config=config_result.value, console=console)

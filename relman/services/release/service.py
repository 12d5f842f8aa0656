"""Release orchestration.

For each configured target, in order:

1. bundle the app (fatal on failure) and, optionally, the DMG installer
   (warning on failure)
2. collect the updater archive + signature from the bundle directory
3. record ``{signature, url}`` under the target's platform key

Targets whose artifacts cannot be collected are skipped with a warning. The
manifest is written once at the end, and only if at least one platform was
recorded.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from relman.core.config import Config
from relman.core.project import Project
from relman.core.result import Err, Ok, Result
from relman.output.console import ConsoleProtocol, Style
from relman.platform.files import atomic_write_json, list_dir_names
from relman.services.release.app_version import (
    read_package_json,
    repo_from_package,
    tag_for_version,
    version_from_package,
)
from relman.services.release.assets import download_url, normalize_archive
from relman.services.release.bundler import build_app, build_installer
from relman.services.release.discovery import (
    find_artifacts,
    read_signature,
    read_updater_json,
)
from relman.services.release.errors import ArtifactMissing, ReleaseError
from relman.services.release.model import PlatformArtifact, ReleaseManifest, new_manifest
from relman.services.release.targets import TargetSpec, resolve_targets


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    manifest: ReleaseManifest
    path: Path
    skipped: tuple[str, ...] = ()


class ReleaseService:
    """Builds every target and writes the consolidated updater manifest."""

    def __init__(self, *, project: Project, config: Config, console: ConsoleProtocol) -> None:
        self._project = project
        self._config = config
        self._console = console

    def run(
        self,
        *,
        repo: str | None = None,
        targets: list[str] | None = None,
        output: Path | None = None,
        skip_build: bool = False,
        installer: bool | None = None,
        now: datetime | None = None,
    ) -> Result[ReleaseOutcome, ReleaseError]:
        started = now or datetime.now(UTC)

        package = read_package_json(self._project.package_json)
        if isinstance(package, Err):
            return package
        version = version_from_package(package.value, path=self._project.package_json)
        if isinstance(version, Err):
            return version

        repo_slug = repo or self._config.repo or repo_from_package(package.value)
        if repo_slug is None:
            return Err(
                ReleaseError(
                    kind="missing_repo",
                    message="no GitHub repository to build download URLs from",
                    hint="Pass --repo owner/name or set [release] repo in release.toml",
                )
            )

        specs = resolve_targets(
            project_root=self._project.root, config=self._config, selected=targets
        )
        if isinstance(specs, Err):
            return specs

        tag = tag_for_version(version.value)
        manifest = new_manifest(
            tag=tag,
            version=version.value,
            notes_template=self._config.notes,
            now=started,
        )
        with_installer = self._config.installer if installer is None else installer

        skipped: list[str] = []
        for spec in specs.value:
            verb = "Collecting" if skip_build else "Building for"
            self._console.header(f"{verb} target: {spec.target}")

            if not skip_build:
                built = build_app(
                    project_root=self._project.root,
                    command=self._config.bundle.command,
                    target=spec.target,
                )
                if isinstance(built, Err):
                    return built
                if with_installer:
                    self._build_installer(spec)

            if not self._collect(spec, manifest, repo=repo_slug, tag=tag):
                skipped.append(spec.target)

        if manifest.is_empty:
            return Err(
                ReleaseError(
                    kind="no_platforms",
                    message="no platform artifacts were collected; manifest not written",
                    hint="Enable bundle.createUpdaterArtifacts in tauri.conf.json",
                )
            )

        out_path = output or self._project.resolve(self._config.output)
        try:
            text = atomic_write_json(out_path, manifest.to_dict())
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="write_failed",
                    message=f"failed to write {out_path}: {e}",
                )
            )

        self._console.newline()
        self._console.success(f"Consolidated manifest written: {out_path}")
        self._console.print_json(text)
        return Ok(ReleaseOutcome(manifest=manifest, path=out_path, skipped=tuple(skipped)))

    def _build_installer(self, spec: TargetSpec) -> None:
        result = build_installer(
            project_root=self._project.root,
            command=self._config.bundle.command,
            target=spec.target,
        )
        if isinstance(result, Err):
            self._console.warning(
                f"installer build for {spec.target} failed ({result.error}); "
                "continuing with updater artifacts"
            )

    def _collect(
        self,
        spec: TargetSpec,
        manifest: ReleaseManifest,
        *,
        repo: str,
        tag: str,
    ) -> bool:
        """Record the target's artifact in ``manifest``; False if skipped."""
        self._console.print(f"Checking bundle dir: {spec.bundle_dir}", Style.DIM)

        found = self._artifact_from_bundle(spec, repo=repo, tag=tag)
        if isinstance(found, Ok):
            manifest.record(spec.platform_key, found.value)
            self._console.success(f"Collected signature for {spec.platform_key}")
            return True

        missing = found.error
        self._console.warning(f"{missing.message} ({missing.target})")
        if spec.bundle_dir.is_dir():
            names = list_dir_names(spec.bundle_dir)
            listing = ", ".join(names) if names else "(empty)"
            self._console.print(f"Bundle dir contents: {listing}", Style.DIM)

        fallback = read_updater_json(spec.bundle_dir, platform_key=spec.platform_key)
        if fallback is not None:
            path, artifact = fallback
            manifest.record(spec.platform_key, artifact)
            self._console.success(f"Collected {spec.platform_key} from updater JSON at {path}")
            return True

        self._console.warning(f"skipping {spec.target}: no manifest entry for {spec.platform_key}")
        return False

    def _artifact_from_bundle(
        self,
        spec: TargetSpec,
        *,
        repo: str,
        tag: str,
    ) -> Result[PlatformArtifact, ArtifactMissing]:
        bundle = self._config.bundle
        found = find_artifacts(
            spec.bundle_dir,
            target=spec.target,
            archive_suffix=bundle.archive_suffix,
            signature_suffix=bundle.signature_suffix,
        )
        if isinstance(found, Err):
            return found

        signature = read_signature(found.value.signature, target=spec.target)
        if isinstance(signature, Err):
            return signature

        archive = normalize_archive(found.value.archive, target=spec.target)
        if isinstance(archive, Err):
            return archive

        return Ok(
            PlatformArtifact(
                signature=signature.value,
                url=download_url(repo=repo, tag=tag, filename=archive.value.name),
            )
        )

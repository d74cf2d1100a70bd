"""Build context: the state shared by every rule compiled in one build.

The context owns the rule set references table. Descriptors that carry a
``??<ident>`` query are only meaningful together with the context that
compiled them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loadchain.core.devtool import SourceMapPolicy, classify_devtool
from loadchain.core.resolve import FilesystemLoaderResolver, LoaderResolver
from loadchain.core.uses.references import IdentGenerator, RuleSetReferences, generate_random_string


@dataclass
class BuildContext:
    context_dir: Path
    resolver: LoaderResolver = field(default_factory=FilesystemLoaderResolver)
    references: RuleSetReferences = field(default_factory=RuleSetReferences)
    ident_generator: IdentGenerator = generate_random_string
    devtool: str = ""
    sass_executable: Optional[str] = None

    def __post_init__(self) -> None:
        self.context_dir = Path(self.context_dir)

    @property
    def source_map_policy(self) -> SourceMapPolicy:
        return classify_devtool(self.devtool)

    @classmethod
    def from_config(
        cls,
        repo_root: Optional[Path] = None,
        *,
        context_dir: Optional[Path] = None,
        resolver: Optional[LoaderResolver] = None,
    ) -> "BuildContext":
        """Build a context from merged Loadchain configuration.

        ``context_dir`` overrides ``build.context``; ``resolver`` replaces the
        filesystem resolver built from the ``resolve`` section.
        """
        from loadchain.core.config import BuildConfig, ResolveConfig

        build = BuildConfig(repo_root=repo_root)
        if resolver is None:
            resolve_cfg = ResolveConfig(repo_root=repo_root)
            resolver = FilesystemLoaderResolver(
                extensions=resolve_cfg.extensions, modules=resolve_cfg.modules
            )
        return cls(
            context_dir=Path(context_dir).resolve() if context_dir else build.context_dir,
            resolver=resolver,
            devtool=build.devtool,
            sass_executable=build.sass_executable,
        )


__all__ = ["BuildContext"]

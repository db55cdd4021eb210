"""Configuration schema definitions using Pydantic for validation.

This module provides strongly-typed configuration classes for module
builders. Using Pydantic ensures configuration errors are caught early
with clear error messages.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


class ToolchainConfig(BaseModel):
    """How to locate one external tool.

    Attributes:
        env_var: Environment variable that overrides the binary name.
        candidates: Well-known binary names, tried in order after the override.
        version_flag: Argument that makes the tool print its version.
    """

    env_var: str
    candidates: List[str]
    version_flag: str = "-v"

    model_config = {"extra": "allow"}

    @field_validator("candidates")
    @classmethod
    def validate_candidates(cls, v: List[str]) -> List[str]:
        """Validate that at least one default candidate is configured."""
        if not any(name.strip() for name in v):
            raise ValueError("candidates must contain at least one binary name")
        return v


class NodeJSBuilderConfig(BaseModel):
    """Configuration for the Node.js (npm/yarn) builder.

    Attributes:
        node: Node.js runtime lookup.
        npm: npm lookup.
        yarn: Yarn lookup.
        install_dir: Directory the package managers install into.
        lockfile: Lockfile whose presence selects Yarn.
        manifest_patterns: Glob patterns (relative to the module root)
            matching installed dependency manifests.
        probe_timeout: Timeout for ``<tool> -v`` probes (seconds).
        install_timeout: Timeout for the install subprocess (seconds).
        max_workers: Maximum threads reading manifests concurrently.
    """

    node: ToolchainConfig = Field(
        default_factory=lambda: ToolchainConfig(
            env_var="NODE_BINARY", candidates=["node", "nodejs"]
        )
    )
    npm: ToolchainConfig = Field(
        default_factory=lambda: ToolchainConfig(env_var="NPM_BINARY", candidates=["npm"])
    )
    yarn: ToolchainConfig = Field(
        default_factory=lambda: ToolchainConfig(env_var="YARN_BINARY", candidates=["yarn"])
    )
    install_dir: str = "node_modules"
    lockfile: str = "yarn.lock"
    manifest_patterns: List[str] = Field(
        default_factory=lambda: [
            "**/node_modules/*/package.json",
            "**/node_modules/@*/*/package.json",
        ]
    )
    probe_timeout: float = Field(default=10.0, gt=0, le=300.0)
    install_timeout: float = Field(default=1800.0, gt=0, le=86400.0)
    max_workers: int = Field(default=8, ge=1, le=64)

    model_config = {"extra": "allow"}

    @field_validator("install_dir", "lockfile")
    @classmethod
    def validate_relative_name(cls, v: str) -> str:
        """Validate that filesystem names stay inside the module root."""
        if not v or v.startswith(("/", "\\")) or ".." in v.replace("\\", "/").split("/"):
            raise ValueError(f"Invalid relative name: {v!r}")
        return v

    @field_validator("manifest_patterns")
    @classmethod
    def validate_patterns(cls, v: List[str]) -> List[str]:
        """Validate that at least one manifest pattern is configured."""
        if not v:
            raise ValueError("manifest_patterns must contain at least one pattern")
        return v


class BuilderConfig(BaseModel):
    """Top-level configuration for module builders.

    Attributes:
        nodejs: Node.js builder configuration.
    """

    nodejs: NodeJSBuilderConfig = Field(default_factory=NodeJSBuilderConfig)

    def for_builder(self, builder_type: str) -> Optional[BaseModel]:
        """Get configuration for a specific builder type.

        Args:
            builder_type: Builder type identifier (nodejs, npm, node).

        Returns:
            Configuration slice for the builder, or None if not found.
        """
        builder_map = {
            "nodejs": self.nodejs,
            "npm": self.nodejs,
            "node": self.nodejs,
        }
        return builder_map.get(builder_type)

    @classmethod
    def default(cls) -> "BuilderConfig":
        """Return the built-in default configuration."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuilderConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            BuilderConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

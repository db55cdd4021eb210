"""Filesystem and toolchain helpers shared by builders."""

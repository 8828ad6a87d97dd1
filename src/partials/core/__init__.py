"""Partials core: include resolution, compilation, configuration."""

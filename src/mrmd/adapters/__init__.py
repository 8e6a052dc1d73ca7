"""Adapters bridging the rendering pipeline with external tools."""

"""Slack knowledge extraction service: classify workspace messages and serve them over HTTP."""

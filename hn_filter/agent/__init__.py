"""Agent module - workflow orchestration and runner."""

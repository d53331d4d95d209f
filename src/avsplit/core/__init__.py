"""avsplit core: orchestrator, base step, shared contracts."""

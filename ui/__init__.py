"""UI module: graph projection, draw commands and the benchmark window."""

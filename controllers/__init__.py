"""Controllers wiring grid files to the loop tracer."""

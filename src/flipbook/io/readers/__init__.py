"""Document readers returning scoped document handles."""

"""Writers persisting published page sequences."""

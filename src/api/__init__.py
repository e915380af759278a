"""HTTP surface for the plant builder."""

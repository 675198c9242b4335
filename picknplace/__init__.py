"""picknplace — G-code for a pick-and-place head from a tape layout and a part list."""

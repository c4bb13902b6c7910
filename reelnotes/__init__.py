"""reelnotes - ratings and notes for the movies and series you watch."""

"""Puerto Vallarta flight board: fetch, normalize and publish today's flights."""

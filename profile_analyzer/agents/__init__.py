"""Pipeline stages: profile fetching, response parsing and report printing."""

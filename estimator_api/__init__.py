"""CO2 emission estimator: formula, projection, metrics and advice behind a FastAPI service."""

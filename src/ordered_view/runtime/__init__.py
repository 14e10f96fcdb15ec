"""Runtime services (telemetry) shared by the view engine."""

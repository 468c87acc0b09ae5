"""Health checks (liveness, readiness e diagnóstico)."""

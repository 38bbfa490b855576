# =============================================================================
# scripts/ - Process Entry Points
# =============================================================================

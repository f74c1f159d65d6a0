"""Framework-agnostic dialog orchestration: requests, form state, validation
and renderer override resolution. Nothing in here imports a UI toolkit at
module load time.
"""

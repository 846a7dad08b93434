"""Runtime Dashboard: web endpoints for the job-processing runtime's dashboard."""

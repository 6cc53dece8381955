"""HTTP surface for Slack's Events API and interactivity requests."""

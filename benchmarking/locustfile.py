"""Locust load testing script for Lexora.

Set LEXORA_SESSION_TOKEN to a valid session token before running. AI-backed
endpoints are left out so a load run does not spend model credits.
"""

import os
import random

from locust import HttpUser, between, task

SEARCHABLE_PROMPTS = [
    "Executive Summary",
    "Action Items",
    "Key Decisions",
]


class LexoraUser(HttpUser):
    """Simulated signed-in user browsing history and shared links."""

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    def on_start(self) -> None:
        """Load the user's history once to get share ids to visit."""
        token = os.environ.get("LEXORA_SESSION_TOKEN", "")
        self.client.headers["Authorization"] = f"Bearer {token}"
        response = self.client.get("/api/summaries")
        self.share_ids = [s["shareId"] for s in response.json()] if response.ok else []

    @task(3)
    def fetch_history(self) -> None:
        """Fetch the summary history - most common operation."""
        self.client.get("/api/summaries")

    @task(2)
    def fetch_prompts(self) -> None:
        """Fetch default and custom prompt templates."""
        self.client.get("/api/prompts")

    @task(2)
    def open_shared_summary_json(self) -> None:
        """Public JSON read of a shared summary."""
        if self.share_ids:
            share_id = random.choice(self.share_ids)
            self.client.get(f"/api/summaries/{share_id}", name="/api/summaries/[shareId]")

    @task(1)
    def open_shared_summary_page(self) -> None:
        """Server-rendered share page."""
        if self.share_ids:
            share_id = random.choice(self.share_ids)
            self.client.get(f"/summary/{share_id}", name="/summary/[shareId]")

    @task(1)
    def save_and_delete_prompt(self) -> None:
        """Create a custom template and remove it again."""
        title = f"{random.choice(SEARCHABLE_PROMPTS)} (load test)"
        response = self.client.post(
            "/api/prompts",
            json={"title": title, "promptText": "Summarize briefly."},
        )
        if response.ok:
            self.client.delete(f"/api/prompts/{response.json()['id']}", name="/api/prompts/[id]")

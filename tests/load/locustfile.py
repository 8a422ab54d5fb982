"""
Load Testing Scripts

Locust load tests for Bloom API endpoints.
Simulates children working through check-ins and guardians
reading reports.

USAGE:
    locust -f tests/load/locustfile.py --host=http://localhost:8000
"""

import random

from locust import HttpUser, between, events, task
from locust.contrib.fasthttp import FastHttpUser

API = "/api/v1"

MOODS = ["happy", "sad", "angry", "worried", "excited", "calm", "tired", "confused"]
COLORS = ["yellow", "blue", "red", "green", "purple", "orange", "pink", "gray"]
SPACE_ITEMS = ["bed", "chair", "lamp", "books", "plant", "tree", "blanket", "pillow"]


class CheckInUser(FastHttpUser):
    """
    Simulated child running check-ins.

    Each task is one complete check-in for a random age.
    """

    wait_time = between(1, 5)

    def on_start(self):
        """Setup for each simulated user."""
        self.patient_id = f"load_child_{random.randint(1000, 9999)}"

    @task(10)
    def health_check(self):
        """Health check - most common request."""
        with self.client.get(f"{API}/health/live", catch_response=True) as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Health check failed: {response.status_code}")

    @task(3)
    def metrics_endpoint(self):
        """Prometheus metrics scrape."""
        self.client.get("/metrics")

    @task(5)
    def check_in(self):
        """Run one check-in from mood to completion."""
        age = random.randint(4, 16)

        with self.client.post(
            f"{API}/checkin/sessions",
            json={"patient_id": self.patient_id, "age": age},
            catch_response=True,
        ) as response:
            if response.status_code != 201:
                response.failure(f"Failed: {response.status_code}")
                return
            session_id = response.json()["session"]["id"]
            features = set(response.json()["profile"]["features"])
            response.success()

        base = f"{API}/checkin/sessions/{session_id}"
        self.client.post(
            f"{base}/mood",
            json={"mood": random.choice(MOODS), "intensity": random.randint(1, 10)},
            name="/checkin/sessions/[id]/mood",
        )
        self.client.post(
            f"{base}/colors",
            json={"colors": random.sample(COLORS, 3)},
            name="/checkin/sessions/[id]/colors",
        )

        if "space" in features:
            self.client.post(
                f"{base}/space",
                json={"items": random.sample(SPACE_ITEMS, 4)},
                name="/checkin/sessions/[id]/space",
            )

        if "prompts" in features:
            self.client.get(f"{base}/prompts", name="/checkin/sessions/[id]/prompts")
            for _ in range(5):
                self.client.post(f"{base}/prompts/skip", name="/checkin/sessions/[id]/prompts/skip")

        self.client.post(f"{base}/complete", json={}, name="/checkin/sessions/[id]/complete")


class GuardianUser(HttpUser):
    """
    Simulated guardian reading a child's history.

    Reads are against whatever history the check-in users built up.
    """

    wait_time = between(2, 6)

    def on_start(self):
        self.patient_id = f"load_child_{random.randint(1000, 9999)}"

    @task(3)
    def report(self):
        self.client.get(
            f"{API}/clinical/patients/{self.patient_id}/report",
            name="/clinical/patients/[id]/report",
        )

    @task(2)
    def alerts(self):
        self.client.get(
            f"{API}/clinical/patients/{self.patient_id}/alerts",
            name="/clinical/patients/[id]/alerts",
        )

    @task(1)
    def insights(self):
        self.client.get(
            f"{API}/clinical/patients/{self.patient_id}/insights",
            name="/clinical/patients/[id]/insights",
        )


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    """Log test start."""
    print("Load test starting...")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """Log test completion."""
    print("Load test complete.")
    print(f"Total requests: {environment.stats.total.num_requests}")
    print(f"Failures: {environment.stats.total.num_failures}")
    print(f"Avg response time: {environment.stats.total.avg_response_time:.2f}ms")

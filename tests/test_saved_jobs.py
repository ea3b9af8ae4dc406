"""
Tests for saved jobs (bookmarks)
"""
import uuid

import pytest

from tests.conftest import auth_headers


class TestSavedJobs:
    """Test saving, listing and removing bookmarks"""

    @pytest.fixture
    async def job(self, factory):
        recruiter, company = await factory.recruiter()
        return await factory.job(recruiter, company)

    @pytest.mark.asyncio
    async def test_save_is_idempotent(self, client, factory, job):
        user = await factory.job_seeker()

        first = await client.post("/api/auth/saved-jobs", json={"jobId": str(job.id)}, headers=auth_headers(user))
        second = await client.post("/api/auth/saved-jobs", json={"jobId": str(job.id)}, headers=auth_headers(user))

        assert first.status_code == second.status_code == 200
        saved = second.json()["savedJobs"]
        assert len(saved) == 1
        assert saved[0]["id"] == str(job.id)
        assert saved[0]["companyName"] == "Acme Corp"
        assert saved[0]["savedAt"]

    @pytest.mark.asyncio
    async def test_list_is_per_user(self, client, factory, job):
        user = await factory.job_seeker()
        other = await factory.job_seeker()
        await client.post("/api/auth/saved-jobs", json={"jobId": str(job.id)}, headers=auth_headers(user))

        mine = await client.get("/api/auth/saved-jobs", headers=auth_headers(user))
        theirs = await client.get("/api/auth/saved-jobs", headers=auth_headers(other))

        assert len(mine.json()["savedJobs"]) == 1
        assert theirs.json()["savedJobs"] == []

    @pytest.mark.asyncio
    async def test_job_id_required(self, client, factory):
        user = await factory.job_seeker()

        response = await client.post("/api/auth/saved-jobs", json={}, headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json()["message"] == "Job ID is required"

    @pytest.mark.asyncio
    async def test_unknown_job(self, client, factory):
        user = await factory.job_seeker()

        response = await client.post(
            "/api/auth/saved-jobs", json={"jobId": str(uuid.uuid4())}, headers=auth_headers(user)
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_remove(self, client, factory, job):
        user = await factory.job_seeker()
        await client.post("/api/auth/saved-jobs", json={"jobId": str(job.id)}, headers=auth_headers(user))

        removed = await client.delete(f"/api/auth/saved-jobs/{job.id}", headers=auth_headers(user))
        again = await client.delete(f"/api/auth/saved-jobs/{job.id}", headers=auth_headers(user))

        assert removed.status_code == 200
        assert removed.json()["savedJobs"] == []
        assert again.status_code == 404
        assert again.json()["message"] == "Job not found in saved jobs"

    @pytest.mark.asyncio
    async def test_requires_login(self, client):
        response = await client.get("/api/auth/saved-jobs")
        assert response.status_code == 401

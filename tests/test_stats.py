"""
Tests for homepage statistics and their cache
"""
from datetime import timedelta

import pytest

from app.utils.helpers import utcnow


class TestHomepageStats:
    """Test the cached homepage snapshot"""

    @pytest.mark.asyncio
    async def test_counts_only_available_jobs(self, client, factory):
        recruiter, company = await factory.recruiter(location="Berlin")
        await factory.job(recruiter, company, title="Open")
        await factory.job(recruiter, company, title="Inactive", status="Inactive")
        await factory.job(recruiter, company, title="Expired", application_deadline=utcnow() - timedelta(days=1))
        seeker = await factory.job_seeker()
        await factory.resume(seeker, skills=["Python", "SQL"])
        other = await factory.job_seeker()
        await factory.resume(other, skills=["Python"])

        response = await client.get("/api/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["stats"]["totalJobs"] == 1
        assert body["stats"]["candidates"] == {"totalCandidates": 2, "skills": {"Python": 2, "SQL": 1}}
        assert body["stats"]["companies"]["totalCompanies"] == 1
        assert body["stats"]["companies"]["locations"] == ["Berlin"]
        assert [job["title"] for job in body["recentJobs"]] == ["Open"]
        assert body["featuredCompanies"][0]["activeJobsCount"] == 1
        assert body["categories"] == [{"name": "Technology", "icon": "💻", "count": 1}]

    @pytest.mark.asyncio
    async def test_snapshot_is_stale_until_ttl(self, client, factory, clock):
        recruiter, company = await factory.recruiter()
        await factory.job(recruiter, company)

        first = await client.get("/api/stats")
        await factory.job(recruiter, company, title="Second")
        cached = await client.get("/api/stats")

        clock.advance(301)
        fresh = await client.get("/api/stats")

        assert first.json()["stats"]["totalJobs"] == 1
        assert cached.json()["stats"]["totalJobs"] == 1
        assert fresh.json()["stats"]["totalJobs"] == 2

    @pytest.mark.asyncio
    async def test_empty_database(self, client):
        response = await client.get("/api/stats")

        body = response.json()
        assert body["stats"]["totalJobs"] == 0
        assert body["featuredCompanies"] == []
        assert body["recentJobs"] == []

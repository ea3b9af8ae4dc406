"""
Tests for posting, updating and searching jobs
"""
import uuid
from datetime import datetime, timedelta

import pytest

from app.utils.helpers import utcnow

from tests.conftest import auth_headers


def job_payload(**overrides):
    payload = {
        "title": "Data Engineer",
        "industry": "Technology",
        "jobType": "full-time",
        "experience": "Mid",
        "salary": "$70,000 - $90,000",
        "location": "Berlin",
        "description": "Own our pipelines",
        "skills": ["Python", "Airflow"],
        "requirements": ["3 years of data work"],
        "responsibilities": ["Build pipelines", " "],
    }
    payload.update(overrides)
    return payload


class TestCreateJob:
    """Test posting jobs"""

    @pytest.mark.asyncio
    async def test_recruiter_posts_job(self, client, factory):
        recruiter, company = await factory.recruiter()

        response = await client.post("/api/jobs", json=job_payload(), headers=auth_headers(recruiter))

        assert response.status_code == 201
        job = response.json()["job"]
        assert job["companyName"] == "Acme Corp"
        assert job["companyId"] == str(company.id)
        assert job["experience"] == "Mid Level"
        assert job["responsibilities"] == ["Build pipelines"]
        assert job["status"] == "Active"
        assert job["isAvailable"] is True

        deadline = datetime.fromisoformat(job["applicationDeadline"])
        assert timedelta(days=29) < deadline - utcnow() <= timedelta(days=30)

    @pytest.mark.asyncio
    async def test_explicit_deadline(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.post(
            "/api/jobs",
            json=job_payload(applicationDeadline="2030-01-31"),
            headers=auth_headers(recruiter),
        )

        assert response.json()["job"]["applicationDeadline"].startswith("2030-01-31")

    @pytest.mark.asyncio
    async def test_missing_fields(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.post("/api/jobs", json={}, headers=auth_headers(recruiter))

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Please provide all required fields: title, industry, jobType, salary, "
            "location, description, requirements, responsibilities"
        )

    @pytest.mark.asyncio
    async def test_unknown_experience_level(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.post("/api/jobs", json=job_payload(experience="Wizard"), headers=auth_headers(recruiter))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_bad_deadline(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.post(
            "/api/jobs", json=job_payload(applicationDeadline="next week"), headers=auth_headers(recruiter)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid application deadline date format"

    @pytest.mark.asyncio
    async def test_job_seekers_cannot_post(self, client, factory):
        seeker = await factory.job_seeker()

        response = await client.post("/api/jobs", json=job_payload(), headers=auth_headers(seeker))

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Recruiter role required."

    @pytest.mark.asyncio
    async def test_anonymous_cannot_post(self, client):
        response = await client.post("/api/jobs", json=job_payload())
        assert response.status_code == 401


class TestReadAndUpdateJob:
    """Test job details and updates"""

    @pytest.mark.asyncio
    async def test_get_job_with_company_and_recruiter(self, client, factory):
        recruiter, company = await factory.recruiter(logo="/uploads/profiles/acme.png")
        job = await factory.job(recruiter, company)

        response = await client.get(f"/api/jobs/{job.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["recruiterName"] == recruiter.full_name
        assert body["company"]["name"] == "Acme Corp"
        # Company logo wins over the job's own logo
        assert body["logo"] == "/uploads/profiles/acme.png"
        assert body["applicationCount"] == 0

    @pytest.mark.asyncio
    async def test_unknown_job(self, client):
        response = await client.get(f"/api/jobs/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Job not found"}

    @pytest.mark.asyncio
    async def test_owner_updates_some_fields(self, client, factory):
        recruiter, company = await factory.recruiter()
        job = await factory.job(recruiter, company)

        response = await client.put(
            f"/api/jobs/{job.id}",
            json={"title": "Senior Backend Developer", "status": "Inactive"},
            headers=auth_headers(recruiter),
        )

        assert response.status_code == 200
        updated = response.json()["job"]
        assert updated["title"] == "Senior Backend Developer"
        assert updated["status"] == "Inactive"
        assert updated["isAvailable"] is False
        assert updated["salary"] == "$40,000 - $50,000"

    @pytest.mark.asyncio
    async def test_other_recruiter_cannot_update(self, client, factory):
        recruiter, company = await factory.recruiter()
        other, _ = await factory.recruiter(company_name="Globex")
        job = await factory.job(recruiter, company)

        response = await client.put(f"/api/jobs/{job.id}", json={"title": "Mine now"}, headers=auth_headers(other))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_blank_required_field(self, client, factory):
        recruiter, company = await factory.recruiter()
        job = await factory.job(recruiter, company)

        response = await client.put(f"/api/jobs/{job.id}", json={"title": "  "}, headers=auth_headers(recruiter))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_null_optional_fields_are_left_alone(self, client, factory):
        recruiter, company = await factory.recruiter()
        job = await factory.job(recruiter, company, experience="Senior Level", logo="/uploads/logos/acme.png")

        response = await client.put(
            f"/api/jobs/{job.id}",
            json={"logo": None, "experience": None, "title": "Staff Engineer"},
            headers=auth_headers(recruiter),
        )

        assert response.status_code == 200
        updated = response.json()["job"]
        assert updated["title"] == "Staff Engineer"
        assert updated["experience"] == "Senior Level"

    @pytest.mark.asyncio
    async def test_recruiter_jobs(self, client, factory):
        recruiter, company = await factory.recruiter()
        other, other_company = await factory.recruiter(company_name="Globex")
        await factory.job(recruiter, company, title="Mine")
        await factory.job(other, other_company, title="Theirs")

        response = await client.get("/api/jobs/recruiter-jobs", headers=auth_headers(recruiter))

        assert [job["title"] for job in response.json()] == ["Mine"]


@pytest.fixture
async def catalog(factory):
    """A small set of jobs across two companies."""
    acme_recruiter, acme = await factory.recruiter(company_name="Acme Corp")
    globex_recruiter, globex = await factory.recruiter(company_name="Globex")
    now = utcnow()
    jobs = {
        "python": await factory.job(
            acme_recruiter, acme, title="Python Developer", salary="$40,000 - $50,000",
            location="Berlin, Germany", created_at=now - timedelta(days=1),
        ),
        "designer": await factory.job(
            acme_recruiter, acme, title="Product Designer", industry="Design", job_type="part-time",
            experience="Senior Level", salary="$60000", location="Remote", created_at=now - timedelta(days=2),
        ),
        "analyst": await factory.job(
            globex_recruiter, globex, title="Data Analyst", industry="Finance", salary="Not specified",
            experience="Mid Level", location="London", skills=["SQL", "Excel"], created_at=now - timedelta(days=3),
        ),
        "intern": await factory.job(
            globex_recruiter, globex, title="100% Remote Intern", job_type="internship",
            salary="$20,000 - $25,000", created_at=now - timedelta(days=4),
        ),
        "closed": await factory.job(
            globex_recruiter, globex, title="Closed Role", status="Inactive", created_at=now,
        ),
    }
    return jobs


def titles(response):
    return [job["title"] for job in response.json()["jobs"]]


class TestSearchJobs:
    """Test the public job search"""

    @pytest.mark.asyncio
    async def test_defaults_to_active_newest_first(self, client, catalog):
        response = await client.get("/api/jobs")

        assert response.status_code == 200
        assert titles(response) == ["Python Developer", "Product Designer", "Data Analyst", "100% Remote Intern"]
        assert response.json()["pagination"] == {"total": 4, "page": 1, "pages": 1, "hasMore": False}

    @pytest.mark.asyncio
    async def test_oldest_first(self, client, catalog):
        response = await client.get("/api/jobs", params={"sort": "oldest"})
        assert titles(response)[0] == "100% Remote Intern"

    @pytest.mark.asyncio
    async def test_search_matches_company_name(self, client, catalog):
        response = await client.get("/api/jobs", params={"search": "globex"})
        assert titles(response) == ["Data Analyst", "100% Remote Intern"]

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, client, catalog):
        response = await client.get("/api/jobs", params={"search": "100%"})
        assert titles(response) == ["100% Remote Intern"]

    @pytest.mark.asyncio
    async def test_job_type_is_exact_and_case_insensitive(self, client, catalog):
        response = await client.get("/api/jobs", params={"jobType": "Part-Time"})
        assert titles(response) == ["Product Designer"]

        response = await client.get("/api/jobs", params={"jobType": "part"})
        assert titles(response) == []

    @pytest.mark.asyncio
    async def test_experience_short_form(self, client, catalog):
        response = await client.get("/api/jobs", params={"experience": "Senior"})
        assert titles(response) == ["Product Designer"]

    @pytest.mark.asyncio
    async def test_unknown_experience_is_ignored(self, client, catalog):
        response = await client.get("/api/jobs", params={"experience": "Wizard"})
        assert response.json()["pagination"]["total"] == 4

    @pytest.mark.asyncio
    async def test_location_and_industry_partial(self, client, catalog):
        response = await client.get("/api/jobs", params={"location": "germany"})
        assert titles(response) == ["Python Developer"]

        response = await client.get("/api/jobs", params={"industry": "fin"})
        assert titles(response) == ["Data Analyst"]

    @pytest.mark.asyncio
    async def test_status_filter(self, client, catalog):
        response = await client.get("/api/jobs", params={"status": "Inactive"})
        assert titles(response) == ["Closed Role"]

    @pytest.mark.asyncio
    async def test_unknown_status_falls_back_to_active(self, client, catalog):
        baseline = await client.get("/api/jobs")
        response = await client.get("/api/jobs", params={"status": "Bogus"})

        assert response.json()["pagination"]["total"] == 4
        assert titles(response) == titles(baseline)

    @pytest.mark.asyncio
    async def test_min_salary(self, client, catalog):
        response = await client.get("/api/jobs", params={"minSalary": "45000"})
        assert titles(response) == ["Python Developer", "Product Designer"]

    @pytest.mark.asyncio
    async def test_max_salary_keeps_unknown_salaries(self, client, catalog):
        response = await client.get("/api/jobs", params={"maxSalary": "30000"})
        assert titles(response) == ["Data Analyst", "100% Remote Intern"]

    @pytest.mark.asyncio
    async def test_equal_bounds(self, client, catalog):
        response = await client.get("/api/jobs", params={"minSalary": "60000", "maxSalary": "60000"})
        assert titles(response) == ["Product Designer"]

    @pytest.mark.asyncio
    async def test_salary_sorts(self, client, catalog):
        high = await client.get("/api/jobs", params={"sort": "salary-high-to-low"})
        low = await client.get("/api/jobs", params={"sort": "salary-low-to-high"})

        assert titles(high) == ["Product Designer", "Python Developer", "100% Remote Intern", "Data Analyst"]
        assert titles(low) == ["Data Analyst", "100% Remote Intern", "Python Developer", "Product Designer"]

    @pytest.mark.asyncio
    async def test_adding_filters_never_grows_the_result(self, client, catalog):
        filters = [
            {},
            {"industry": "tech"},
            {"industry": "tech", "jobType": "full-time"},
            {"industry": "tech", "jobType": "full-time", "minSalary": "30000"},
            {"industry": "tech", "jobType": "full-time", "minSalary": "30000", "search": "python"},
        ]
        totals = []
        for params in filters:
            response = await client.get("/api/jobs", params=params)
            totals.append(response.json()["pagination"]["total"])

        assert totals == sorted(totals, reverse=True)
        assert totals[-1] == 1


class TestPagination:
    """Test page windows and page counts"""

    @pytest.mark.asyncio
    async def test_pages(self, client, factory):
        recruiter, company = await factory.recruiter()
        now = utcnow()
        for i in range(12):
            await factory.job(recruiter, company, title=f"Job {i:02d}", created_at=now - timedelta(minutes=i))

        first = await client.get("/api/jobs", params={"limit": 5})
        last = await client.get("/api/jobs", params={"limit": 5, "page": 3})
        beyond = await client.get("/api/jobs", params={"limit": 5, "page": 4})

        assert first.json()["pagination"] == {"total": 12, "page": 1, "pages": 3, "hasMore": True}
        assert titles(first) == [f"Job {i:02d}" for i in range(5)]
        assert titles(last) == ["Job 10", "Job 11"]
        assert last.json()["pagination"]["hasMore"] is False
        assert titles(beyond) == []

    @pytest.mark.asyncio
    async def test_salary_pass_paginates_after_filtering(self, client, factory):
        recruiter, company = await factory.recruiter()
        now = utcnow()
        for i in range(6):
            salary = "$90,000 - $100,000" if i % 2 == 0 else "Not specified"
            await factory.job(recruiter, company, title=f"Job {i}", salary=salary, created_at=now - timedelta(minutes=i))

        response = await client.get("/api/jobs", params={"minSalary": "50000", "limit": 2, "page": 2})

        assert titles(response) == ["Job 4"]
        assert response.json()["pagination"] == {"total": 3, "page": 2, "pages": 2, "hasMore": False}

    @pytest.mark.asyncio
    async def test_invalid_page(self, client):
        response = await client.get("/api/jobs", params={"page": 0})

        assert response.status_code == 400
        assert "page" in response.json()["details"]


class TestFilterOptions:
    """Test filter widgets and top companies"""

    @pytest.mark.asyncio
    async def test_filter_options(self, client, catalog):
        response = await client.get("/api/jobs/filters")

        body = response.json()
        assert body["jobTypes"] == ["Full-Time", "Internship", "Part-Time"]
        assert body["experienceLevels"] == ["Entry", "Mid", "Senior"]
        assert body["skills"] == ["Excel", "Python", "SQL"]

    @pytest.mark.asyncio
    async def test_top_companies(self, client, catalog):
        response = await client.get("/api/jobs/top-companies")

        companies = response.json()
        assert [company["name"] for company in companies] == ["Globex", "Acme Corp"]
        assert companies[0]["jobCount"] == 3

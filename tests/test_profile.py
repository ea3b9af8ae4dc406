"""
Tests for profiles, the resume builder, uploads and recruiter public profiles
"""
import uuid

import pytest

from tests.conftest import auth_headers

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def resume_payload(**overrides):
    payload = {
        "fullName": "Jane Seeker",
        "email": "jane@example.com",
        "phoneNumber": "+1 555 0100",
        "education": [{"degree": "B.Sc", "institution": "State University", "year": "2020"}],
        "experience": [{"jobTitle": "Developer", "company": "Initech", "duration": "2 years"}],
        "skills": ["Python", " SQL ", ""],
    }
    payload.update(overrides)
    return payload


class TestResumeBuilder:
    """Test creating and reading the resume"""

    @pytest.mark.asyncio
    async def test_save_and_read_resume(self, client, factory):
        user = await factory.job_seeker()

        response = await client.post("/api/resume", json=resume_payload(), headers=auth_headers(user))

        assert response.status_code == 201
        resume = response.json()["resume"]
        assert resume["skills"] == ["Python", "SQL"]
        assert resume["experience"][0]["jobTitle"] == "Developer"

        fetched = await client.get("/api/resume", headers=auth_headers(user))
        assert fetched.status_code == 200
        assert fetched.json()["resume"]["id"] == resume["id"]

    @pytest.mark.asyncio
    async def test_second_save_replaces_first(self, client, factory):
        user = await factory.job_seeker()
        first = await client.post("/api/resume", json=resume_payload(), headers=auth_headers(user))

        second = await client.post(
            "/api/resume", json=resume_payload(skills=["Go"]), headers=auth_headers(user)
        )

        assert second.json()["resume"]["id"] == first.json()["resume"]["id"]
        assert second.json()["resume"]["skills"] == ["Go"]

    @pytest.mark.asyncio
    async def test_incomplete_resume_reports_each_field(self, client, factory):
        user = await factory.job_seeker()

        response = await client.post(
            "/api/resume",
            json={"email": "bad", "education": [{"degree": "B.Sc"}]},
            headers=auth_headers(user),
        )

        assert response.status_code == 400
        details = response.json()["details"]
        assert set(details) == {"fullName", "email", "education", "experience", "skills"}

    @pytest.mark.asyncio
    async def test_missing_resume_is_404(self, client, factory):
        user = await factory.job_seeker()

        response = await client.get("/api/resume", headers=auth_headers(user))

        assert response.status_code == 404
        assert response.json()["message"] == "Resume not found"

    @pytest.mark.asyncio
    async def test_recruiters_have_no_resume(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.get("/api/resume", headers=auth_headers(recruiter))

        assert response.status_code == 403


class TestJobSeekerProfile:
    """Test the job seeker profile"""

    @pytest.mark.asyncio
    async def test_profile_includes_resume(self, client, factory):
        user = await factory.job_seeker()
        await factory.resume(user)

        response = await client.get("/api/auth/profile", headers=auth_headers(user))

        assert response.status_code == 200
        profile = response.json()["user"]
        assert profile["role"] == "Job Seeker"
        assert profile["resume"]["skills"] == ["Python", "SQL"]
        assert "company" not in profile

    @pytest.mark.asyncio
    async def test_update_profile_with_resume(self, client, factory):
        user = await factory.job_seeker(email="jane@example.com")

        response = await client.put(
            "/api/auth/profile",
            json={
                "fullName": "Jane Q. Seeker",
                "email": "jane.q@example.com",
                "phoneNumber": "+1 555 0199",
                "resume": {"skills": ["Rust"], "education": [], "experience": []},
            },
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        profile = response.json()["user"]
        assert profile["fullName"] == "Jane Q. Seeker"
        assert profile["email"] == "jane.q@example.com"
        assert profile["resume"]["skills"] == ["Rust"]
        assert profile["resume"]["email"] == "jane.q@example.com"

    @pytest.mark.asyncio
    async def test_update_requires_contact_fields(self, client, factory):
        user = await factory.job_seeker()

        response = await client.put(
            "/api/auth/profile",
            json={"fullName": "Jane", "email": "jane@example.com"},
            headers=auth_headers(user),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide all required fields: phoneNumber"

    @pytest.mark.asyncio
    async def test_email_taken_by_someone_else(self, client, factory):
        await factory.job_seeker(email="taken@example.com")
        user = await factory.job_seeker()

        response = await client.put(
            "/api/auth/profile",
            json={"fullName": "Jane", "email": "Taken@example.com", "phoneNumber": "+1 555 0100"},
            headers=auth_headers(user),
        )

        assert response.status_code == 409


class TestRecruiterProfile:
    """Test the recruiter profile and company"""

    @pytest.mark.asyncio
    async def test_profile_has_company_jobs_and_stats(self, client, factory):
        recruiter, company = await factory.recruiter()
        job = await factory.job(recruiter, company)
        await factory.job(recruiter, company, status="Inactive")
        seeker = await factory.job_seeker()
        await factory.application(seeker, job)

        response = await client.get("/api/auth/profile", headers=auth_headers(recruiter))

        profile = response.json()["user"]
        assert profile["company"]["name"] == "Acme Corp"
        assert profile["jobsCount"] == 2
        assert profile["companyStats"] == {"activeJobs": 1, "totalApplications": 1}
        assert sorted(j["applicationCount"] for j in profile["postedJobs"]) == [0, 1]

    @pytest.mark.asyncio
    async def test_update_company(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.put(
            "/api/auth/profile",
            json={"company": {"name": "Acme Labs", "description": "Research", "employees": 40}},
            headers=auth_headers(recruiter),
        )

        assert response.status_code == 200
        company = response.json()["user"]["company"]
        assert company["name"] == "Acme Labs"
        assert company["employees"] == 40
        # Omitted optional fields keep their stored value
        assert company["industry"] == "Technology"

    @pytest.mark.asyncio
    async def test_company_description_required(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.put(
            "/api/auth/profile",
            json={"company": {"name": "Acme Labs"}},
            headers=auth_headers(recruiter),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Company description is required"


class TestUploads:
    """Test profile picture and company logo uploads"""

    @pytest.mark.asyncio
    async def test_profile_picture(self, client, factory):
        user = await factory.job_seeker()

        response = await client.put(
            "/api/auth/profile-picture",
            files={"profilePicture": ("me.png", PNG_BYTES, "image/png")},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        path = response.json()["profilePicture"]
        assert path.startswith("/uploads/profiles/")
        assert path.endswith("-me.png")

        profile = await client.get("/api/auth/profile", headers=auth_headers(user))
        assert profile.json()["user"]["profilePicture"] == path

    @pytest.mark.asyncio
    async def test_recruiter_picture_is_company_logo(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.put(
            "/api/auth/profile-picture",
            files={"profilePicture": ("logo.png", PNG_BYTES, "image/png")},
            headers=auth_headers(recruiter),
        )

        assert response.status_code == 200
        profile = await client.get("/api/auth/profile", headers=auth_headers(recruiter))
        assert profile.json()["user"]["company"]["logo"] == response.json()["profilePicture"]

    @pytest.mark.asyncio
    async def test_non_image_rejected(self, client, factory):
        user = await factory.job_seeker()

        response = await client.put(
            "/api/auth/profile-picture",
            files={"profilePicture": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers(user),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_no_file(self, client, factory):
        user = await factory.job_seeker()

        response = await client.put("/api/auth/profile-picture", headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json()["message"] == "No file uploaded"

    @pytest.mark.asyncio
    async def test_company_logo_is_recruiter_only(self, client, factory):
        user = await factory.job_seeker()

        response = await client.put(
            "/api/auth/company-logo",
            files={"companyLogo": ("logo.png", PNG_BYTES, "image/png")},
            headers=auth_headers(user),
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Only recruiters can update company logo"

    @pytest.mark.asyncio
    async def test_company_logo(self, client, factory):
        recruiter, _ = await factory.recruiter()

        response = await client.put(
            "/api/auth/company-logo",
            files={"companyLogo": ("logo.png", PNG_BYTES, "image/png")},
            headers=auth_headers(recruiter),
        )

        assert response.status_code == 200
        assert response.json()["companyLogo"].startswith("/uploads/profiles/")


class TestRecruiterPublicProfile:
    """Test the public view of a recruiter"""

    @pytest.mark.asyncio
    async def test_public_profile(self, client, factory):
        recruiter, company = await factory.recruiter()
        await factory.job(recruiter, company)
        await factory.job(recruiter, company, status="Inactive")
        viewer = await factory.job_seeker()

        response = await client.get(f"/api/recruiters/profile/{recruiter.id}", headers=auth_headers(viewer))

        assert response.status_code == 200
        assert response.json()["activeJobsCount"] == 1
        assert response.json()["company"]["name"] == "Acme Corp"

    @pytest.mark.asyncio
    async def test_not_a_recruiter(self, client, factory):
        seeker = await factory.job_seeker()

        response = await client.get(f"/api/recruiters/profile/{seeker.id}", headers=auth_headers(seeker))

        assert response.status_code == 400
        assert response.json()["message"] == "User is not a recruiter"

    @pytest.mark.asyncio
    async def test_unknown_user(self, client, factory):
        seeker = await factory.job_seeker()

        response = await client.get(f"/api/recruiters/profile/{uuid.uuid4()}", headers=auth_headers(seeker))

        assert response.status_code == 404

import pytest

RESUME = ("resume.pdf", b"%PDF-1.4 fake resume", "application/pdf")


class ApplicationsTestBase:
    def _login(self, client, email="a@x.com", name="A"):
        r = client.post("/api/auth/login", json={"email": email, "name": name})
        return r.json()["token"]

    def _auth(self, token):
        return {"Authorization": f"Bearer {token}"}

    def _create_job(self, client, token):
        r = client.post("/api/jobs", json={
            "title": "Dev",
            "company": "Acme",
            "description": "Build things",
            "lastDate": "2025-01-01",
            "driveType": "Walk-in Drive",
        }, headers=self._auth(token))
        return r.json()["id"]

    def _form(self, job_id, **overrides):
        form = {
            "jobId": job_id,
            "name": "Cand Idate",
            "email": "cand@example.com",
            "location": "Pune",
            "collegeName": "State College",
            "tenthPercentage": "88.5",
            "degreePercentage": "72",
            "selectedLanguage": "Python",
            "communication": "7",
        }
        form.update(overrides)
        return form

    def _submit(self, client, token, form, resume=RESUME):
        files = {"resume": resume} if resume else None
        return client.post("/api/applications", data=form, files=files, headers=self._auth(token))


class TestApplications(ApplicationsTestBase):
    def test_submit_application(self, client):
        token = self._login(client)
        job_id = self._create_job(client, token)

        r = self._submit(client, token, self._form(job_id))
        assert r.status_code == 201, r.text
        data = r.json()
        assert data["jobId"] == job_id
        assert data["collegeName"] == "State College"
        assert data["tenthPercentage"] == 88.5
        assert data["communication"] == 7
        assert data["resume_filename"] == "resume.pdf"
        assert len(data["resume_hash"]) == 64  # SHA-256 hex

    def test_resume_stored_under_uploads(self, client, tmp_data):
        token = self._login(client)
        job_id = self._create_job(client, token)
        self._submit(client, token, self._form(job_id))

        stored = list((tmp_data / "uploads" / job_id).iterdir())
        assert len(stored) == 1
        assert stored[0].read_bytes() == RESUME[1]

    def test_unknown_job_creates_nothing(self, client, test_db):
        token = self._login(client)
        r = self._submit(client, token, self._form("no-such-job"))
        assert r.status_code == 404
        assert r.json()["detail"]["code"] == "job_not_found"

        from jobboard.models.application import Application
        db = test_db()
        try:
            assert db.query(Application).count() == 0
        finally:
            db.close()

    def test_unknown_job_reported_before_field_errors(self, client):
        token = self._login(client)
        r = self._submit(client, token, self._form("no-such-job", name="", communication="99"))
        assert r.status_code == 404

    @pytest.mark.parametrize("value", ["0", "100"])
    def test_percentage_bounds_accepted(self, client, value):
        token = self._login(client)
        job_id = self._create_job(client, token)
        r = self._submit(client, token, self._form(job_id, tenthPercentage=value, degreePercentage=value))
        assert r.status_code == 201

    @pytest.mark.parametrize("value", ["101", "-1"])
    def test_percentage_out_of_range(self, client, value):
        token = self._login(client)
        job_id = self._create_job(client, token)
        r = self._submit(client, token, self._form(job_id, degreePercentage=value))
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "out_of_range"
        assert r.json()["detail"]["field"] == "degreePercentage"

    @pytest.mark.parametrize("value", ["1", "10"])
    def test_communication_bounds_accepted(self, client, value):
        token = self._login(client)
        job_id = self._create_job(client, token)
        r = self._submit(client, token, self._form(job_id, communication=value))
        assert r.status_code == 201

    @pytest.mark.parametrize("value", ["0", "11"])
    def test_communication_out_of_range(self, client, value):
        token = self._login(client)
        job_id = self._create_job(client, token)
        r = self._submit(client, token, self._form(job_id, communication=value))
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "out_of_range"

    def test_missing_text_field(self, client):
        token = self._login(client)
        job_id = self._create_job(client, token)
        form = self._form(job_id)
        del form["collegeName"]
        r = self._submit(client, token, form)
        assert r.status_code == 422
        assert r.json()["detail"] == {
            "code": "validation_failed",
            "field": "collegeName",
            "message": "collegeName is required",
        }

    def test_invalid_language(self, client):
        token = self._login(client)
        job_id = self._create_job(client, token)
        r = self._submit(client, token, self._form(job_id, selectedLanguage="COBOL"))
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "invalid_choice"

    def test_missing_resume(self, client):
        token = self._login(client)
        job_id = self._create_job(client, token)
        r = self._submit(client, token, self._form(job_id), resume=None)
        assert r.status_code == 415
        assert r.json()["detail"]["code"] == "unsupported_document"

    def test_unsupported_resume_type(self, client):
        token = self._login(client)
        job_id = self._create_job(client, token)
        r = self._submit(client, token, self._form(job_id), resume=("resume.exe", b"MZ", "application/x-msdownload"))
        assert r.status_code == 415

    def test_docx_resume_accepted(self, client):
        token = self._login(client)
        job_id = self._create_job(client, token)
        docx = (
            "cv.docx",
            b"PK fake docx",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        )
        r = self._submit(client, token, self._form(job_id), resume=docx)
        assert r.status_code == 201

    def test_oversized_resume_rejected(self, client, test_db, tmp_data, monkeypatch):
        from jobboard.config import settings
        monkeypatch.setattr(settings, "max_upload_bytes", 10)

        token = self._login(client)
        job_id = self._create_job(client, token)
        r = self._submit(client, token, self._form(job_id), resume=("cv.pdf", b"x" * 50, "application/pdf"))
        assert r.status_code == 413
        assert not (tmp_data / "uploads" / job_id).exists()

        from jobboard.models.application import Application
        db = test_db()
        try:
            assert db.query(Application).count() == 0
        finally:
            db.close()

    def test_duplicate_submissions_permitted(self, client):
        token = self._login(client)
        job_id = self._create_job(client, token)
        first = self._submit(client, token, self._form(job_id))
        second = self._submit(client, token, self._form(job_id))
        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["id"] != second.json()["id"]

    def test_application_count_is_derived(self, client):
        token = self._login(client)
        job_id = self._create_job(client, token)
        before = client.get(f"/api/jobs/{job_id}", headers=self._auth(token)).json()
        self._submit(client, token, self._form(job_id))
        after = client.get(f"/api/jobs/{job_id}", headers=self._auth(token)).json()

        assert after["application_count"] == 1
        assert after["updated_at"] == before["updated_at"]

    def test_requires_auth(self, client):
        r = client.post("/api/applications", data={"jobId": "x"}, files={"resume": RESUME})
        assert r.status_code == 401


class TestReviewingApplications(ApplicationsTestBase):
    def test_owner_lists_applications(self, client):
        owner = self._login(client, "a@x.com", "A")
        candidate = self._login(client, "c@x.com", "C")
        job_id = self._create_job(client, owner)
        self._submit(client, candidate, self._form(job_id, name="First"))
        self._submit(client, candidate, self._form(job_id, name="Second"))

        r = client.get(f"/api/jobs/{job_id}/applications", headers=self._auth(owner))
        assert r.status_code == 200
        assert [a["name"] for a in r.json()] == ["First", "Second"]

    def test_non_owner_cannot_list_applications(self, client):
        owner = self._login(client, "a@x.com", "A")
        other = self._login(client, "b@x.com", "B")
        job_id = self._create_job(client, owner)

        r = client.get(f"/api/jobs/{job_id}/applications", headers=self._auth(other))
        assert r.status_code == 403

    def test_owner_downloads_resume(self, client):
        owner = self._login(client, "a@x.com", "A")
        candidate = self._login(client, "c@x.com", "C")
        job_id = self._create_job(client, owner)
        app_id = self._submit(client, candidate, self._form(job_id)).json()["id"]

        r = client.get(f"/api/applications/{app_id}/resume", headers=self._auth(owner))
        assert r.status_code == 200
        assert r.content == RESUME[1]

        r = client.get(f"/api/applications/{app_id}/resume", headers=self._auth(candidate))
        assert r.status_code == 403

    def test_deleting_job_removes_its_applications(self, client, test_db, tmp_data):
        owner = self._login(client, "a@x.com", "A")
        job_id = self._create_job(client, owner)
        self._submit(client, owner, self._form(job_id))
        assert (tmp_data / "uploads" / job_id).is_dir()

        assert client.delete(f"/api/jobs/{job_id}", headers=self._auth(owner)).status_code == 204
        assert not (tmp_data / "uploads" / job_id).exists()

        from jobboard.models.application import Application
        db = test_db()
        try:
            assert db.query(Application).filter(Application.job_id == job_id).count() == 0
        finally:
            db.close()

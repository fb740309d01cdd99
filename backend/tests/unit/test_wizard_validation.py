"""Tests for the wizard Step Validator.

These tests verify:
- Presence checks and Indonesian messages per step
- Email, phone, date-text and numeric-range rules
- List entry keys ("pendidikan[0].lokasi") and nested leaf keys ("kota")
- Reachability (validate_through) and whole-draft validation
"""

from datetime import date

import pytest

from app.wizard.flows.employer import EMPLOYER_WIZARD
from app.wizard.flows.job_posting import JOB_POSTING_WIZARD
from app.wizard.flows.job_seeker import JOB_SEEKER_WIZARD
from app.wizard.validation import (
    MSG_DATE_TOO_OLD,
    MSG_FUTURE_DATE,
    MSG_INVALID_DATE,
    MSG_INVALID_EMAIL,
    MSG_INVALID_PHONE,
    StepValidator,
    check_date_text,
    is_present,
    parse_date_text,
)

job_seeker = StepValidator(JOB_SEEKER_WIZARD)
employer = StepValidator(EMPLOYER_WIZARD)
job_posting = StepValidator(JOB_POSTING_WIZARD)


# =============================================================================
# Helpers
# =============================================================================


class TestIsPresent:
    """Which values satisfy a required field."""

    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, 0])
    def test_missing_values(self, value):
        assert is_present(value) is False

    @pytest.mark.parametrize("value", ["Budi", ["x"], {"a": 1}, 3, False, True])
    def test_present_values(self, value):
        assert is_present(value) is True


class TestDateText:
    """Textual date parsing and checks."""

    @pytest.mark.parametrize("text", ["05/08/1995", "5/8/1995", "05-08-1995", "1995-08-05"])
    def test_accepted_formats(self, text):
        assert parse_date_text(text) == date(1995, 8, 5)

    @pytest.mark.parametrize("text", ["31/02/2020", "1995/08/05", "Agustus 1995", "5.8.1995"])
    def test_rejected_formats(self, text):
        assert parse_date_text(text) is None

    def test_future_date_rejected_unless_allowed(self):
        today = date(2024, 1, 1)
        assert check_date_text("02/01/2024", today=today) == MSG_FUTURE_DATE
        assert check_date_text("02/01/2024", allow_future=True, today=today) is None

    def test_date_before_1900_rejected(self):
        assert check_date_text("31/12/1899") == MSG_DATE_TOO_OLD

    def test_non_string_is_invalid(self):
        assert check_date_text(19950805) == MSG_INVALID_DATE


# =============================================================================
# Job-seeker steps
# =============================================================================


class TestJobSeekerPersonalInfo:
    """Step 1: informasi pribadi."""

    def test_missing_email_reports_indonesian_message(self, job_seeker_draft):
        job_seeker_draft["email"] = ""
        errors = job_seeker.validate(1, job_seeker_draft)
        assert errors == {"email": "Alamat email wajib diisi"}

    def test_malformed_email(self, job_seeker_draft):
        job_seeker_draft["email"] = "budi@example"
        assert job_seeker.validate(1, job_seeker_draft) == {"email": MSG_INVALID_EMAIL}

    @pytest.mark.parametrize(
        "phone", ["081234567890", "+6281234567890", "6281234567", "0812345678"]
    )
    def test_indonesian_mobile_numbers_accepted(self, job_seeker_draft, phone):
        job_seeker_draft["nomorTelepon"] = phone
        assert job_seeker.validate(1, job_seeker_draft) == {}

    @pytest.mark.parametrize(
        "phone", ["0212345678", "+6591234567", "0801234567", "08123", "0812345678901"]
    )
    def test_other_numbers_rejected(self, job_seeker_draft, phone):
        job_seeker_draft["nomorTelepon"] = phone
        assert job_seeker.validate(1, job_seeker_draft) == {
            "nomorTelepon": MSG_INVALID_PHONE
        }

    def test_all_blank_reports_every_required_field(self):
        errors = job_seeker.validate(1, JOB_SEEKER_WIZARD.initial_draft())
        assert set(errors) == {"namaLengkap", "email", "nomorTelepon"}


class TestJobSeekerAdditionalInfo:
    """Step 2: informasi lanjutan."""

    def test_missing_birth_date_blocks_step_three(self, job_seeker_draft):
        job_seeker_draft["tanggalLahir"] = ""
        assert job_seeker.validate_through(3, job_seeker_draft) == 2
        assert job_seeker.validate(2, job_seeker_draft) == {
            "tanggalLahir": "Tanggal lahir wajib diisi"
        }

    def test_impossible_birth_date(self, job_seeker_draft):
        job_seeker_draft["tanggalLahir"] = "30/02/1995"
        assert job_seeker.validate(2, job_seeker_draft) == {
            "tanggalLahir": MSG_INVALID_DATE
        }

    def test_birth_date_in_future(self, job_seeker_draft):
        job_seeker_draft["tanggalLahir"] = "01/01/2999"
        assert job_seeker.validate(2, job_seeker_draft) == {
            "tanggalLahir": MSG_FUTURE_DATE
        }

    def test_weight_out_of_range(self, job_seeker_draft):
        job_seeker_draft["beratBadan"] = "25"
        assert job_seeker.validate(2, job_seeker_draft) == {
            "beratBadan": "Berat badan harus antara 30-200 kg"
        }

    def test_blank_height_is_optional(self, job_seeker_draft):
        job_seeker_draft["tinggiBadan"] = ""
        assert job_seeker.validate(2, job_seeker_draft) == {}

    @pytest.mark.parametrize("field", ["beratBadan", "tinggiBadan"])
    def test_zero_counts_as_unset(self, job_seeker_draft, field):
        job_seeker_draft[field] = 0
        assert job_seeker.validate(2, job_seeker_draft) == {}


class TestJobSeekerAddress:
    """Step 3: nested alamat fields report under their leaf name."""

    def test_missing_city(self, job_seeker_draft):
        job_seeker_draft["alamat"]["kota"] = " "
        assert job_seeker.validate(3, job_seeker_draft) == {"kota": "Kota wajib diisi"}

    def test_missing_address_object(self, job_seeker_draft):
        job_seeker_draft["alamat"] = None
        assert len(job_seeker.validate(3, job_seeker_draft)) == 8


class TestJobSeekerWorkExperience:
    """Step 7: work history, required unless entry level."""

    def test_entry_level_may_skip_work_history(self, job_seeker_draft):
        job_seeker_draft["levelPengalaman"] = "entry_level"
        job_seeker_draft["pengalamanKerja"] = []
        assert job_seeker.validate(7, job_seeker_draft) == {}

    def test_experienced_needs_one_entry(self, job_seeker_draft):
        job_seeker_draft["pengalamanKerja"] = []
        assert job_seeker.validate(7, job_seeker_draft) == {
            "pengalamanKerja": "Minimal satu pengalaman kerja wajib diisi"
        }

    def test_entry_fields_use_indexed_keys(self, job_seeker_draft):
        job_seeker_draft["pengalamanKerja"].append(
            {"namaPerusahaan": "CV Sejahtera", "posisi": "", "tanggalMulai": "2018"}
        )
        assert job_seeker.validate(7, job_seeker_draft) == {
            "pengalamanKerja[1].posisi": "Posisi/Jabatan wajib diisi",
            "pengalamanKerja[1].tanggalMulai": MSG_INVALID_DATE,
        }


class TestJobSeekerEducation:
    """Step 8: pendidikan entries."""

    def test_missing_location_on_entry(self, job_seeker_draft):
        job_seeker_draft["pendidikan"][0]["lokasi"] = ""
        assert job_seeker.validate(8, job_seeker_draft) == {
            "pendidikan[0].lokasi": "Lokasi wajib diisi"
        }

    def test_expected_graduation_in_future_is_allowed(self, job_seeker_draft):
        job_seeker_draft["pendidikan"][0]["tanggalLulus"] = "30/06/2999"
        assert job_seeker.validate(8, job_seeker_draft) == {}

    def test_empty_list(self, job_seeker_draft):
        job_seeker_draft["pendidikan"] = []
        assert job_seeker.validate(8, job_seeker_draft) == {
            "pendidikan": "Minimal satu pendidikan wajib diisi"
        }


class TestJobSeekerExpectations:
    """Step 13: ekspektasi kerja."""

    def test_missing_section(self, job_seeker_draft):
        job_seeker_draft["ekspektasiKerja"] = None
        errors = job_seeker.validate(13, job_seeker_draft)
        assert errors == {
            "jobTypes": "Jenis pekerjaan wajib diisi",
            "commuteMethod": "Pilih salah satu opsi",
            "willingToTravel": "Pilih salah satu opsi",
        }

    def test_ideal_salary_below_minimum(self, job_seeker_draft):
        job_seeker_draft["ekspektasiKerja"]["idealSalary"] = 5000000
        assert job_seeker.validate(13, job_seeker_draft) == {
            "idealSalary": "Gaji ideal harus lebih besar atau sama dengan gaji minimum"
        }

    def test_negative_salary(self, job_seeker_draft):
        job_seeker_draft["ekspektasiKerja"]["minSalary"] = -1
        assert job_seeker.validate(13, job_seeker_draft) == {
            "minSalary": "Gaji minimum harus lebih dari 0"
        }

    def test_salaries_are_optional(self, job_seeker_draft):
        del job_seeker_draft["ekspektasiKerja"]["minSalary"]
        del job_seeker_draft["ekspektasiKerja"]["idealSalary"]
        assert job_seeker.validate(13, job_seeker_draft) == {}


class TestJobSeekerWholeDraft:
    """Reachability and full-draft validation."""

    def test_complete_draft_has_no_failures(self, job_seeker_draft):
        assert job_seeker.validate_all(job_seeker_draft) == {}
        assert job_seeker.validate_through(15, job_seeker_draft) is None

    def test_optional_steps_never_fail(self):
        empty = JOB_SEEKER_WIZARD.initial_draft()
        for index in (4, 5, 10, 11, 12, 15):
            assert job_seeker.validate(index, empty) == {}

    def test_empty_draft_fails_every_required_step(self):
        failures = job_seeker.validate_all(JOB_SEEKER_WIZARD.initial_draft())
        assert sorted(failures) == [1, 2, 3, 6, 7, 8, 9, 13, 14]

    def test_first_step_is_always_reachable(self):
        assert job_seeker.validate_through(1, {}) is None

    def test_validation_does_not_modify_draft(self, job_seeker_draft):
        before = repr(job_seeker_draft)
        job_seeker.validate_all(job_seeker_draft)
        assert repr(job_seeker_draft) == before


# =============================================================================
# Employer and job-posting steps
# =============================================================================


class TestEmployerSteps:
    """Employer onboarding rules."""

    def test_complete_draft_is_valid(self, employer_draft):
        assert employer.validate_all(employer_draft) == {}

    def test_missing_company_email(self, employer_draft):
        employer_draft["email"] = ""
        assert employer.validate(1, employer_draft) == {"email": "Email wajib diisi"}

    def test_pic_phone_format(self, employer_draft):
        employer_draft["pic"]["nomorTelepon"] = "0311234567"
        assert employer.validate(3, employer_draft) == {
            "nomorTelepon": "Format nomor telepon Indonesia tidak valid"
        }

    def test_online_presence_is_optional(self):
        assert employer.validate(2, {}) == {}


class TestJobPostingSteps:
    """Job-posting wizard rules."""

    def test_complete_draft_is_valid(self, job_posting_draft):
        assert job_posting.validate_all(job_posting_draft) == {}

    def test_positions_must_be_at_least_one(self, job_posting_draft):
        job_posting_draft["numberOfPositions"] = 0
        assert job_posting.validate(1, job_posting_draft) == {
            "numberOfPositions": "Jumlah tenaga kerja wajib diisi"
        }

    def test_blank_responsibilities_do_not_count(self, job_posting_draft):
        job_posting_draft["responsibilities"] = ["", "  "]
        assert job_posting.validate(1, job_posting_draft) == {
            "responsibilities": "Tugas dan tanggung jawab wajib diisi"
        }

    def test_location_needs_city_and_province(self, job_posting_draft):
        job_posting_draft["workLocations"][0]["province"] = ""
        assert job_posting.validate(1, job_posting_draft) == {
            "workLocations[0].province": "Provinsi wajib diisi"
        }

    def test_deadline_may_be_in_future_but_must_parse(self, job_posting_draft):
        job_posting_draft["applicationDeadline"] = "2099/12/31"
        assert job_posting.validate(2, job_posting_draft) == {
            "applicationDeadline": MSG_INVALID_DATE
        }

    @pytest.mark.parametrize(
        ("age_range", "message"),
        [
            ({"min": 14, "max": 30}, "Umur minimal tidak valid (minimal 15 tahun)"),
            ({"min": 30, "max": 25}, "Umur maksimal harus lebih besar dari umur minimal"),
        ],
    )
    def test_age_range(self, job_posting_draft, age_range, message):
        job_posting_draft["expectations"]["ageRange"] = age_range
        assert job_posting.validate(3, job_posting_draft) == {"ageRange": message}

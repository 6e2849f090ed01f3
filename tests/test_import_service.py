"""
Tests for guest list import
"""

import io

import pandas as pd

from app.services.import_service import ImportService
from app.services.repositories import GuestRepo

HEADER = "Code,Salutation,Full Name,Title / Position,Organization / Company\n"

def test_import_csv(memory_store):
    guests = GuestRepo(memory_store)
    content = (HEADER + "STH00002, Mr. , Ha Van Khoi ,Director,Sotrans\n"
               "00012,Ms.,Lan,,\n"
               ",Mr.,No Code,CEO,Acme\n").encode("utf-8")

    success, errors, count = ImportService.process_upload(content, "guests.csv", guests)

    assert success
    assert errors == []
    assert count == 2
    khoi = guests.lookup("STH00002")
    assert khoi.salutation == "Mr."
    assert khoi.name == "Ha Van Khoi"
    lan = guests.lookup("00012")
    assert lan.position == ""
    assert lan.company == ""

def test_import_headers_are_case_insensitive(memory_store):
    guests = GuestRepo(memory_store)
    content = b"code, FULL NAME \nA1,Alice\n"

    success, _, count = ImportService.process_upload(content, "guests.csv", guests)

    assert success
    assert count == 1
    assert guests.lookup("A1").name == "Alice"
    assert guests.lookup("A1").salutation == ""

def test_import_upserts_existing_guest(memory_store):
    guests = GuestRepo(memory_store)
    ImportService.process_upload((HEADER + "G1,Mr.,A,Eng,Acme\n").encode(), "a.csv", guests)
    ImportService.process_upload((HEADER + "G1,Mr.,A,CTO,Acme\n").encode(), "b.csv", guests)

    assert guests.count() == 1
    assert guests.lookup("G1").position == "CTO"

def test_import_missing_code_column(memory_store):
    guests = GuestRepo(memory_store)

    success, errors, count = ImportService.process_upload(b"Full Name\nAlice\n", "guests.csv", guests)

    assert not success
    assert count == 0
    assert "code" in errors[0]
    assert guests.count() == 0

def test_import_rejects_unknown_extension(memory_store):
    success, errors, _ = ImportService.process_upload(b"x", "guests.txt", GuestRepo(memory_store))
    assert not success
    assert "Unsupported" in errors[0]

def test_import_excel(memory_store):
    df = pd.DataFrame([["X1", "Ms.", "Xena", "COO", "Zeta"]],
                      columns=["Code", "Salutation", "Full Name", "Title / Position", "Organization / Company"])
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, index=False)

    guests = GuestRepo(memory_store)
    success, _, count = ImportService.process_upload(buffer.getvalue(), "guests.xlsx", guests)

    assert success
    assert count == 1
    assert guests.lookup("X1").company == "Zeta"

def test_template_round_trips(memory_store):
    guests = GuestRepo(memory_store)
    success, _, count = ImportService.process_upload(ImportService.create_template(), "template.csv", guests)
    assert success
    assert count == 1

def test_import_counts_repeated_codes_once(memory_store):
    guests = GuestRepo(memory_store)
    content = (HEADER + "A1,Mr.,First,Eng,Acme\nA1,Mr.,Second,Eng,Acme\n A1 ,Mr.,Third,Eng,Acme\n").encode("utf-8")

    success, errors, count = ImportService.process_upload(content, "guests.csv", guests)

    assert success
    assert errors == []
    assert count == 1
    assert guests.count() == 1
    assert guests.lookup("A1").name == "Third"

"""Tests for lead-list structuring."""

from promptgate.tools.leads import parse_lead_array, structure_leads, synthesize_leads

LEAD_FIELDS = ("companyName", "contactEmail", "contactName", "phone", "website", "address")


class TestParseLeadArray:

    def test_array_inside_prose(self):
        """Array embedded in prose is extracted."""
        text = (
            "Here are your leads:\n"
            '[{"companyName": "Acme", "contactEmail": "a@acme.io"}, {"companyName": "Globex"}]\n'
            "Good luck!"
        )
        leads = parse_lead_array(text)
        assert [lead["companyName"] for lead in leads] == ["Acme", "Globex"]

    def test_no_array(self):
        """Text without brackets yields nothing."""
        assert parse_lead_array("1. Acme Corp\n2. Globex") is None

    def test_broken_json(self):
        """Invalid JSON yields nothing."""
        assert parse_lead_array('[{"companyName": "Acme",]') is None

    def test_array_without_objects(self):
        """Arrays of non-objects are rejected."""
        assert parse_lead_array('["Acme", "Globex"]') is None


class TestStructureLeads:

    def test_parsed_leads_are_not_synthetic(self):
        """Parsed leads are returned as is."""
        leads, synthetic = structure_leads('[{"companyName": "Acme"}]', "SaaS")
        assert leads == [{"companyName": "Acme"}]
        assert synthetic is False

    def test_fallback_without_array_has_five_complete_records(self):
        """Placeholder leads have every field filled."""
        leads, synthetic = structure_leads("Acme Corp, Austin TX\nGlobex, Dallas TX", "Real Estate", "Texas")

        assert synthetic is True
        assert len(leads) == 5
        for lead in leads:
            for field in LEAD_FIELDS:
                assert lead[field], f"{field} empty in {lead}"

        assert leads[0]["address"] == "Acme Corp, Austin TX"
        assert leads[1]["address"] == "Globex, Dallas TX"
        assert leads[4]["address"] == "Texas, State"
        assert leads[0]["contactEmail"] == "contact1@realestate.com"
        assert leads[2]["website"] == "https://realestate3.com"
        assert leads[3]["phone"] == "+1-555-000-1003"
        assert leads[0]["companyName"] == "Real Estate Company 1"

    def test_fallback_with_many_lines_still_five(self):
        """Placeholder count does not follow the line count."""
        text = "\n".join(f"line {i}" for i in range(20))
        leads, synthetic = structure_leads(text, "Retail")
        assert synthetic is True
        assert len(leads) == 5

    def test_fallback_with_empty_text(self):
        """Empty output still yields five placeholder leads."""
        leads, synthetic = structure_leads("", "Retail")
        assert len(leads) == 5
        assert all(lead["address"] == "City, State" for lead in leads)


def test_synthesize_is_deterministic_and_truncates_addresses():
    """Same input gives the same leads, addresses capped at 50 chars."""
    text = "x" * 80
    first = synthesize_leads(text, "Health", None)
    second = synthesize_leads(text, "Health", None)
    assert first == second
    assert len(first[0]["address"]) == 50


def test_symbol_only_industry_still_yields_domains():
    """Industry without letters falls back to a generic domain."""
    leads = synthesize_leads("", "+++")
    assert leads[0]["contactEmail"] == "contact1@company.com"

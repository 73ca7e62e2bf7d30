"""Tests for LearnedFacts."""

from xpilot.memory import LearnedFacts


class TestMerge:
    def test_adds_new_categories(self):
        facts = LearnedFacts()
        assert facts.merge({"name": ["Sam"]}) is True
        assert facts.to_dict() == {"name": ["Sam"]}

    def test_union_keeps_existing_order(self):
        facts = LearnedFacts({"technologies": ["python"]})
        facts.merge({"technologies": ["docker", "python"]})
        assert facts.get("technologies") == ["python", "docker"]

    def test_never_shrinks(self):
        facts = LearnedFacts({"technologies": ["python", "rust"]})
        facts.merge({"technologies": []})
        assert facts.get("technologies") == ["python", "rust"]

    def test_duplicates_in_input_dropped(self):
        facts = LearnedFacts()
        facts.merge({"interests": ["graphs", "graphs"]})
        assert facts.get("interests") == ["graphs"]

    def test_empty_input_reports_no_change(self):
        facts = LearnedFacts({"name": ["Sam"]})
        assert facts.merge({}) is False
        assert facts.merge({"name": ["Sam"]}) is False


class TestEditing:
    def test_replace(self):
        facts = LearnedFacts({"name": ["Sam"]})
        facts.replace({"technologies": ["go", "go"], "empty": []})
        assert facts.to_dict() == {"technologies": ["go"]}

    def test_clear(self):
        facts = LearnedFacts({"name": ["Sam"]})
        facts.clear()
        assert not facts
        assert len(facts) == 0

    def test_remove_value_drops_empty_category(self):
        facts = LearnedFacts({"name": ["Sam"]})
        assert facts.remove_value("name", "Sam") is True
        assert "name" not in facts

    def test_remove_missing(self):
        facts = LearnedFacts({"name": ["Sam"]})
        assert facts.remove_value("name", "Alex") is False
        assert facts.remove_value("other", "Sam") is False
        assert facts.remove_category("other") is False

    def test_to_dict_is_a_copy(self):
        facts = LearnedFacts({"name": ["Sam"]})
        data = facts.to_dict()
        data["name"].append("Alex")
        assert facts.get("name") == ["Sam"]

    def test_equality_with_mapping(self):
        assert LearnedFacts({"name": ["Sam"]}) == {"name": ["Sam"]}
        assert LearnedFacts() == LearnedFacts({})

"""Serialization module — export computed workout facts as JSON."""

from workout_engine.serialization.facts_json import to_facts_dict, to_facts_json_string

__all__ = ["to_facts_dict", "to_facts_json_string"]

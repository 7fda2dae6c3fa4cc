from dimensia.units.parser import is_unit_name, parse_unit_string

__all__ = ["parse_unit_string", "is_unit_name"]

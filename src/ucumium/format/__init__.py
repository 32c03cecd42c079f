from ucumium.format.ucum_format import ParsePosition, Result, UCUMFormat, Variant

__all__ = ["UCUMFormat", "Variant", "ParsePosition", "Result"]

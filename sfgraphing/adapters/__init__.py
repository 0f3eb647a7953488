from sfgraphing.adapters.normalize import coerce_1d_numeric, coerce_rows, is_nested, materialize

__all__ = ["coerce_1d_numeric", "coerce_rows", "is_nested", "materialize"]

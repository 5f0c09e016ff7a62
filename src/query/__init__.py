"""Free-text query translation.

The query layer converts an English natural-language query into a strict `FilterSet`, which is
then used by the match engine to select stored strings.
"""

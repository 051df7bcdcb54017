"""Application – tag-indexed cache use cases (store-agnostic)."""

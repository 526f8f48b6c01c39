"""Annotation of way and relation history with child versions, change-to-diff and relation ordering."""
"""Sorbet/RBI type expressions for protobuf fields of Ruby generated code."""

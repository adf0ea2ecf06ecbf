"""Processor core: memory, registers, opcode table and step engine."""

"""Vet clinic appointment scheduling service"""

"""Endpoint, contract and error primitives shared by the protocol helpers"""

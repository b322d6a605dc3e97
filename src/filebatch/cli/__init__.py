"""Command line interface for filebatch"""

"""Setup package for building"""
import setuptools

setuptools.setup()

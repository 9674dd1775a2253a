"""
holds submodules related to predicting fusion transcripts from chimeric read alignments
"""
__version__ = '0.1.0'

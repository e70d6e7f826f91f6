"""
texmake - compile LaTeX sources into PostScript or PDF

A small build orchestrator that replaces a hand-maintained LaTeX Makefile.

Architecture:
- Resolution Context: Picks the .tex source to act on
- Building Context: Drives latex/pdflatex, dvips, ps2pdf and pdf2ps
- Cleaning Context: Removes transient files and derivable outputs
- Backup Context: Git-backed save/restore of the working directory
"""

__version__ = "0.1.0"

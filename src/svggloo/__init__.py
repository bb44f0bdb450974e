"""svggloo - Merge CSV data into SVG templates.

svggloo renders one SVG document per row of a CSV file by merging the row's
fields into a Jinja2 template, then optionally converts every rendered file
to PDF with an external converter (Inkscape, CairoSVG or svg2pdf).

Conventions:
- The data for ``brochure.svg`` lives in ``brochure.csv`` beside it
- Output file names are derived from selected data fields
- The same template and data always produce the same files
"""

__version__ = "0.1.0"
__author__ = "svggloo Contributors"

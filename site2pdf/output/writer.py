"""
Writes assembled documents and the run report to the output directory.
"""

import json
import os
from typing import List, Sequence, Set

from .assembler import OutputDocument, OutputMode
from ..errors import PageError
from ..utils.log import get_logger
from ..utils.paths import ensure_dir, generate_slug, unique_slug, write_file


class OutputWriter:
    """
    Saves output documents under a single directory.
    
    File names are slugs of the source URL: the seed URL for a merged
    document, each page URL in separate mode.
    """
    
    ERROR_LOG = "errors.json"
    
    def __init__(self, output_dir: str):
        self.output_dir = os.path.abspath(output_dir)
        self.logger = get_logger("writer")
    
    def write(self, output: OutputDocument, seed_url: str) -> List[str]:
        """
        Write every document of ``output``.
        
        Args:
            output: Assembled documents
            seed_url: Seed URL, names the merged document
            
        Returns:
            Paths of the written PDF files
        """
        ensure_dir(self.output_dir)
        
        paths: List[str] = []
        
        if output.mode is OutputMode.COMBINED:
            document = output.documents[0]
            path = os.path.join(self.output_dir, f"{generate_slug(seed_url)}.pdf")
            write_file(path, document.data)
            self.logger.info(f"PDF saved to {path}")
            paths.append(path)
            return paths
        
        taken: Set[str] = set()
        for document in output.documents:
            slug = unique_slug(document.source_url, taken)
            path = os.path.join(self.output_dir, f"{slug}.pdf")
            write_file(path, document.data)
            self.logger.info(f"PDF saved to {path}")
            paths.append(path)
        
        return paths
    
    def write_error_log(self, errors: Sequence[PageError]) -> None:
        """Generate errors.json file if there are errors."""
        if not errors:
            return
        
        errors_path = os.path.join(self.output_dir, self.ERROR_LOG)
        ensure_dir(self.output_dir)
        
        with open(errors_path, 'w', encoding='utf-8') as f:
            json.dump([e.to_dict() for e in errors], f, indent=2, ensure_ascii=False)
        
        self.logger.info(f"Generated error log: {errors_path}")

"""decimath.functions: one public function per operation."""

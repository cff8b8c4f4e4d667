import json
import pathlib

from schema_templates.config import get_settings
from schema_templates.schema import import_spec
from schema_templates.templates import generate_package

BASE = pathlib.Path(__file__).parent
spec = json.loads((BASE.parent / "tests" / "fixtures" / "storage_schema.json").read_text())
package = import_spec(spec)
files = generate_package(get_settings().generator_name, package)
for path, contents in sorted(files.items()):
    print(f"{path} ({len(contents)} bytes)")

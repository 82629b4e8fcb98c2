# structurizr_site/constants.py
from __future__ import annotations

# Workspace file extensions accepted by the loader (JSON is read as YAML).
WORKSPACE_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")

# Keys under `views` in the Structurizr JSON export, paired with the view kind
# they hold. Order is the order views are indexed in.
VIEW_SECTIONS: tuple[tuple[str, str], ...] = (
    ("systemLandscapeViews", "systemLandscape"),
    ("systemContextViews", "systemContext"),
    ("containerViews", "container"),
    ("componentViews", "component"),
    ("dynamicViews", "dynamic"),
    ("deploymentViews", "deployment"),
)

SOFTWARE_SYSTEMS_DIR = "software-systems"
DECISIONS_DIR = "decisions"
PUML_DIR = "puml"
STYLESHEET = "style.css"
INDEX_FILE = "index.html"

EXTERNAL_LOCATION = "External"
EXTERNAL_TAG_DEFAULT = "External"

# Workspace properties understood by the generator.
PROP_COLOR_PRIMARY = "generatr.style.colors.primary"
PROP_COLOR_SECONDARY = "generatr.style.colors.secondary"
PROP_EXTERNAL_TAG = "generatr.site.externalTag"

COLOR_PRIMARY_DEFAULT = "#333333"
COLOR_SECONDARY_DEFAULT = "#cccccc"

PLANTUML_CMD_DEFAULT = "plantuml"
ASCIIDOCTOR_CMD_DEFAULT = "asciidoctor"

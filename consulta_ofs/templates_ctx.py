from fastapi.templating import Jinja2Templates

from consulta_ofs.config import TEMPLATES_DIR
from consulta_ofs.constants import COUNT_UNKNOWN_LABEL, PLACEHOLDER, SELECT_ALL
from consulta_ofs.resources import RESOURCES

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["placeholder"] = PLACEHOLDER
templates.env.globals["count_unknown_label"] = COUNT_UNKNOWN_LABEL
templates.env.globals["select_all"] = SELECT_ALL
templates.env.globals["nav_resources"] = list(RESOURCES.values())

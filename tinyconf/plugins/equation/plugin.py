"""Equation plugin - TeX equation editor with symbol libraries.

The symbol libraries are sent as one JSON-encoded string so the editor
can render the palette tabs without a second round trip.
"""

import json

from ..base import Plugin, PluginMeta, SettingsRequest, flag
from ...interfaces import Setting

TEX_DOCS_PAGE = "Using_TeX_Notation"

# Used when the site has not customised a library group
DEFAULT_LIBRARY_GROUPS = {
    "librarygroup1": "\n".join(
        [
            "\\cdot", "\\times", "\\ast", "\\div", "\\diamond", "\\pm", "\\mp",
            "\\oplus", "\\ominus", "\\otimes", "\\oslash", "\\odot", "\\circ",
            "\\bullet", "\\asymp", "\\equiv", "\\subseteq", "\\supseteq",
            "\\leq", "\\geq", "\\preceq", "\\succeq", "\\sim", "\\simeq",
            "\\approx", "\\subset", "\\supset", "\\ll", "\\gg", "\\prec",
            "\\succ", "\\infty", "\\in", "\\ni", "\\forall", "\\exists",
            "\\neq",
        ]
    ),
    "librarygroup2": "\n".join(
        [
            "\\leftarrow", "\\rightarrow", "\\uparrow", "\\downarrow",
            "\\leftrightarrow", "\\nearrow", "\\searrow", "\\swarrow",
            "\\nwarrow", "\\Leftarrow", "\\Rightarrow", "\\Uparrow",
            "\\Downarrow", "\\Leftrightarrow",
        ]
    ),
    "librarygroup3": "\n".join(
        [
            "\\alpha", "\\beta", "\\gamma", "\\delta", "\\epsilon", "\\zeta",
            "\\eta", "\\theta", "\\iota", "\\kappa", "\\lambda", "\\mu",
            "\\nu", "\\xi", "\\pi", "\\rho", "\\sigma", "\\tau", "\\upsilon",
            "\\phi", "\\chi", "\\psi", "\\omega", "\\Gamma", "\\Delta",
            "\\Theta", "\\Lambda", "\\Xi", "\\Pi", "\\Sigma", "\\Upsilon",
            "\\Phi", "\\Psi", "\\Omega",
        ]
    ),
    "librarygroup4": "\n".join(
        [
            "\\sum{a,b}", "\\sqrt[a]{b+c}", "\\int_{a}^{b}{c}",
            "\\iint_{a}^{b}{c}", "\\iiint_{a}^{b}{c}", "\\oint{a}", "(a)",
            "[a]", "\\lbrace{a}\\rbrace",
            "\\left| \\begin{matrix} a_1 & a_2 \\\\ a_3 & a_4 \\end{matrix} \\right|",
            "\\frac{a}{b+c}", "\\vec{a}", "\\binom {a} {b}", "{a \\brack b}",
            "{a \\brace b}",
        ]
    ),
}


class EquationPlugin(Plugin):
    """Equation editor settings."""

    meta = PluginMeta(id="equation", version="1.0.0")

    def get_libraries(self, request: SettingsRequest) -> list[dict]:
        """Build the symbol library groups, first group active."""
        languages = request.site.languages
        groups = []
        for index, (key, default) in enumerate(DEFAULT_LIBRARY_GROUPS.items(), start=1):
            raw = self.get_config(request, key, default)
            group = {
                "key": f"group{index}",
                "groupname": languages.get_string(key, self.meta.namespace),
                "elements": raw.strip().split("\n"),
            }
            if index == 1:
                group["active"] = True
            groups.append(group)
        return groups

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        texfilter = request.site.config.get_bool("filter_tex", "active")
        libraries = json.dumps(self.get_libraries(request), separators=(",", ":"))
        return [
            Setting("texfilter", flag(texfilter)),
            Setting("libraries", libraries),
            Setting("texdocsurl", request.site.languages.get_docs_url(TEX_DOCS_PAGE)),
        ]


def create_plugin() -> EquationPlugin:
    return EquationPlugin()

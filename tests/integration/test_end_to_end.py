"""
End-to-end tests: chatlog text and config file in, cohost-ready HTML out.
"""

import re

import yaml

from cohoard.config import Config, load_config
from cohoard.models import Post, Timestamp
from cohoard.parser import parse_posts
from cohoard.render import load_default_template, render


CHATLOG = """
AARON: bee removal
in progress
CASSIE: ~~no~~ *yes*

@ Today at 4:20 PM
AARON: ```py
print("bzz")
```
"""

TEMPLATE = """<style>
.post { margin: 4px; }
.cohoard-codeblock { background: #eee; }
</style>
{% for block in posts %}{% if block.type == "timestamp" %}<hr title="{{ block.message }}">
{% else %}<div class="post" style="color: {{ block.user.color }}"><b>{{ block.user.name }}</b> {{ block.message | markdown }}</div>
{% endif %}{% endfor %}"""


class TestEndToEndPipeline:
    """Test the complete parse and render workflow."""

    def test_full_pipeline(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump({
                "people": [
                    {"key": "AARON", "name": "Aaron", "color": "#FF8200"},
                    {"key": "CASSIE", "name": "Cassie", "color": "#69C97A"},
                ]
            }, f)

        # 1. CONFIG
        config = load_config(config_path)
        assert len(config) == 2

        # 2. PARSE
        blocks = parse_posts(config, CHATLOG)
        assert [type(block) for block in blocks] == [Post, Post, Timestamp, Post]
        assert blocks[0].message == "bee removal\nin progress\n"
        assert blocks[3].message == '```py\nprint("bzz")\n```\n'

        # 3. RENDER
        html = render("post.html", TEMPLATE, blocks, config)

        assert "<style" not in html
        assert "<html>" not in html
        assert "class=" not in html
        assert "<s>no</s>" in html
        assert "<em>yes</em>" in html
        assert 'title="Today at 4:20 PM"' in html

        # Styled code block, language class stripped after inlining
        assert re.search(r'<div style="background:\s*#eee;?">print\(&quot;bzz&quot;\)\n</div>', html) or \
            re.search(r'<div style="background:\s*#eee;?">print\("bzz"\)\n</div>', html)

        # Posts keep their order and their inlined margin
        names = re.findall(r"<b>(\w+)</b>", html)
        assert names == ["Aaron", "Cassie", "Aaron"]
        assert len(re.findall(r"margin:\s*4px", html)) == 3

    def test_default_template_without_config(self):
        config = Config.empty()
        blocks = parse_posts(config, "X: hi\n@ Later\nY: bye\n")

        html = render("discord.html", load_default_template(), blocks, config)

        assert html.index(">X<") < html.index(">Later<") < html.index(">Y<")
        assert "<style" not in html

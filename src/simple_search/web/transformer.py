"""
Content Transformer

Turns raw page markup into cleaned, main-content-focused readable text.
"""

import re
from typing import Callable, Literal
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, NavigableString, PageElement, PreformattedString
from pydantic import BaseModel, ConfigDict

from ..types import PageCapture


class TransformConfig(BaseModel):
    """Options for the markup-to-text transformation."""

    model_config = ConfigDict(frozen=True)

    return_format: Literal["markdown", "text"] = "markdown"
    clean_html: bool = True
    main_content: bool = True


class ContentTransformer:
    """Converts captured pages to markdown or plain text."""

    # HTML elements that add noise to content
    NOISE_ELEMENTS = [
        "script",
        "style",
        "noscript",
        "template",
        "iframe",
        "svg",
        "canvas",
        "form",
        "button",
        "nav",
        "header",
        "footer",
        "aside",
    ]

    # CSS selectors for noise removal
    NOISE_SELECTORS = [
        '[class*="advert"]',
        '[class*="sidebar"]',
        '[class*="cookie"]',
        '[class*="popup"]',
        '[class*="modal"]',
        '[class*="newsletter"]',
        '[id*="sidebar"]',
        '[id*="cookie"]',
        '[role="navigation"]',
        '[role="banner"]',
        '[role="contentinfo"]',
        '[aria-hidden="true"]',
    ]

    # CSS selectors for finding main content
    CONTENT_SELECTORS = [
        "main",
        "article",
        '[role="main"]',
        ".content",
        ".post-content",
        ".article-content",
        ".entry-content",
        "#content",
        "#main-content",
        ".post-body",
        ".article-body",
        ".content-body",
    ]

    HEADINGS = {"h1", "h2", "h3", "h4", "h5", "h6"}

    BLOCK_ELEMENTS = {
        "p",
        "div",
        "section",
        "article",
        "main",
        "figure",
        "figcaption",
        "dl",
        "dt",
        "dd",
        "address",
        "details",
        "summary",
    }

    # Elements never rendered, even when clean_html is off
    SKIPPED_ELEMENTS = {"script", "style", "noscript", "template", "head", "title"}

    # Private-use characters bracketing rendered pre blocks until fences are written
    FENCE_OPEN = "\ue000"
    FENCE_CLOSE = "\ue001"
    FENCE_MARKS = str.maketrans("", "", FENCE_OPEN + FENCE_CLOSE)

    def transform(self, page: PageCapture, config: TransformConfig) -> str:
        """
        Transform a captured page into readable text.

        Args:
            page: The captured page
            config: Output format and cleaning options

        Returns:
            Readable text, markdown formatted unless config asks for plain text
        """
        soup = BeautifulSoup(page["html"], "html.parser")

        if config.clean_html:
            self._remove_noise_elements(soup)

        if config.main_content:
            root = self._find_main_content(soup)
        else:
            body = soup.find("body")
            root = body if isinstance(body, Tag) else soup

        if config.return_format == "markdown":
            return self._normalize_markdown(self._render_markdown(root, page["url"]))
        return self._extract_clean_text(root)

    def _remove_noise_elements(self, soup: BeautifulSoup) -> None:
        """Remove unwanted elements that add noise."""
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()

        for element in soup(self.NOISE_ELEMENTS):
            if not element.decomposed:
                element.decompose()

        for selector in self.NOISE_SELECTORS:
            for element in soup.select(selector):
                if not element.decomposed:
                    element.decompose()

    def _find_main_content(self, soup: BeautifulSoup) -> Tag | BeautifulSoup:
        """Find the main content area of the page."""
        for selector in self.CONTENT_SELECTORS:
            main_content = soup.select_one(selector)
            if main_content and main_content.get_text(strip=True):
                return main_content

        body_element = soup.find("body")
        if body_element and isinstance(body_element, Tag):
            return body_element

        return soup

    def _walk(
        self,
        root: PageElement,
        leaf: Callable[[PageElement], str | None],
        combine: Callable[[Tag, list[tuple[PageElement, str]]], str],
    ) -> str:
        """
        Fold an element tree bottom-up without recursion.

        leaf returns the text for an element that needs no children, or None for
        a container. combine builds a container's text from its rendered
        children, in document order.
        """
        text = leaf(root)
        if text is not None:
            return text

        stack = [(root, iter(root.children), [])]
        while True:
            elem, children, rendered = stack[-1]
            child = next(children, None)
            if child is not None:
                text = leaf(child)
                if text is None:
                    stack.append((child, iter(child.children), []))
                else:
                    rendered.append((child, text))
                continue

            stack.pop()
            text = combine(elem, rendered)
            if not stack:
                return text
            stack[-1][2].append((elem, text))

    def _render_markdown(self, root: Tag | BeautifulSoup, base_url: str) -> str:
        """Render an element tree as loosely spaced markdown."""
        return self._walk(
            root,
            self._markdown_leaf,
            lambda elem, rendered: self._markdown_container(elem, rendered, base_url),
        )

    def _markdown_leaf(self, elem: PageElement) -> str | None:
        if isinstance(elem, PreformattedString):
            return ""
        if isinstance(elem, NavigableString):
            return re.sub(r"\s+", " ", str(elem).translate(self.FENCE_MARKS))
        if not isinstance(elem, Tag):
            return ""

        name = elem.name
        if name in self.SKIPPED_ELEMENTS or name == "img":
            return ""
        if name == "br":
            return "\n"
        if name == "hr":
            return "\n\n---\n\n"
        if name == "pre":
            code = elem.get_text().translate(self.FENCE_MARKS).strip("\n")
            if not code.strip():
                return ""
            return f"\n\n{self.FENCE_OPEN}{code}{self.FENCE_CLOSE}\n\n"
        if name == "code":
            code = elem.get_text().translate(self.FENCE_MARKS)
            return f"`{code}`" if code.strip() else ""
        return None

    def _markdown_container(
        self, elem: Tag, rendered: list[tuple[PageElement, str]], base_url: str
    ) -> str:
        name = elem.name
        if name == "tr":
            cells = [
                text.strip()
                for child, text in rendered
                if isinstance(child, Tag) and child.name in ("th", "td")
            ]
            return "\n| " + " | ".join(cells) + " |" if any(cells) else ""

        inner = "".join(text for _, text in rendered)

        if name in self.HEADINGS:
            text = inner.strip()
            return f"\n\n{'#' * int(name[1])} {text}\n\n" if text else ""
        if name == "li":
            text = inner.strip()
            return f"\n- {text}" if text else ""
        if name in ("ul", "ol", "table"):
            return f"\n\n{inner}\n\n"
        if name == "blockquote":
            lines = [line.strip() for line in inner.strip().splitlines() if line.strip()]
            return "\n\n" + "\n".join(f"> {line}" for line in lines) + "\n\n"
        if name == "a":
            text = inner.strip()
            href = elem.get("href")
            if text and isinstance(href, str) and not href.startswith(("#", "javascript:")):
                return f"[{text}]({urljoin(base_url, href)})"
            return inner
        if name in ("strong", "b"):
            text = inner.strip()
            return f"**{text}**" if text else ""
        if name in ("em", "i"):
            text = inner.strip()
            return f"*{text}*" if text else ""
        if name in self.BLOCK_ELEMENTS:
            return f"\n\n{inner}\n\n"
        return inner

    def _normalize_markdown(self, text: str) -> str:
        """Collapse spacing outside fenced code blocks and write the fences."""
        fence = re.escape(self.FENCE_OPEN) + ".*?" + re.escape(self.FENCE_CLOSE)
        parts = re.split(f"({fence})", text, flags=re.S)
        # Even segments are prose, odd segments are marked code blocks
        for i, part in enumerate(parts):
            if i % 2:
                parts[i] = f"```\n{part[1:-1]}\n```"
            else:
                part = re.sub(r"[ \t]+", " ", part)
                part = re.sub(r" *\n *", "\n", part)
                parts[i] = re.sub(r"\n{3,}", "\n\n", part)
        return "".join(parts).strip()

    def _extract_clean_text(self, element: Tag | BeautifulSoup) -> str:
        """Extract clean text with proper spacing between elements."""

        def leaf(elem):
            if isinstance(elem, PreformattedString):
                return ""
            if isinstance(elem, NavigableString):
                return str(elem).strip()
            if elem.name in self.SKIPPED_ELEMENTS:
                return ""
            return None

        def combine(elem, rendered):
            text_parts = [text for _, text in rendered if text]

            if elem.name in self.BLOCK_ELEMENTS or elem.name in self.HEADINGS:
                return " ".join(text_parts) + "\n\n" if text_parts else ""
            elif elem.name == "li":
                return "• " + " ".join(text_parts) + "\n" if text_parts else ""
            elif elem.name == "br":
                return "\n"
            else:
                return " ".join(text_parts) + " " if text_parts else ""

        text_content = self._walk(element, leaf, combine)

        text_content = re.sub(r"\n\s*\n\s*\n", "\n\n", text_content)
        text_content = re.sub(r" +", " ", text_content)

        return text_content.strip()

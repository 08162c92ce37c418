"""HTML parsing helpers for the Node.js docs index."""
from typing import List

from bs4 import BeautifulSoup


def parse_module_list(html_content: str) -> List[str]:
    """Parse the ordered list of module identifiers from a synopsis page.

    The page has no class or id on the module list, so this relies on it being
    the second `<ul>` in the document. Each `<li>` links to `<module>.html`;
    the identifier is everything before the first dot.
    """
    soup = BeautifulSoup(html_content, 'html.parser')
    lists = soup.find_all('ul')
    if len(lists) < 2:
        return []

    modules = []
    for item in lists[1].find_all('li', recursive=False):
        link = item.find('a', href=True)
        if not link:
            continue
        href = link.get('href')
        if isinstance(href, (list, tuple)):
            href = href[0]
        name = str(href).split('.')[0]
        if name:
            modules.append(name)
    return modules

"""Static file serving with directory listings"""

import html
import os
import stat
from urllib.parse import quote

import anyio
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import URL


def _listing(full_path: str) -> str:
    """Render a directory as a list of links, directories suffixed with '/'"""
    lines = ["<pre>"]
    for entry in sorted(os.scandir(full_path), key=lambda e: e.name):
        name = entry.name + "/" if entry.is_dir() else entry.name
        lines.append(f'<a href="{quote(name)}">{html.escape(name)}</a>')
    lines.append("</pre>")
    return "\n".join(lines) + "\n"


class ListingStaticFiles(StaticFiles):
    """
    StaticFiles that also serves directories.

    A directory is answered with its `index.html` when present, otherwise
    with a listing of its entries. Directory paths without a trailing slash
    are redirected to the slashed form so relative links resolve.
    """

    async def get_response(self, path: str, scope):
        full_path, stat_result = await anyio.to_thread.run_sync(self.lookup_path, path)
        if stat_result is None or not stat.S_ISDIR(stat_result.st_mode):
            return await super().get_response(path, scope)

        if scope["method"] not in ("GET", "HEAD"):
            return await super().get_response(path, scope)

        if not scope["path"].endswith("/"):
            url = URL(scope=scope)
            url = url.replace(path=url.path + "/")
            return RedirectResponse(url=url, status_code=301)

        index_path, index_stat = await anyio.to_thread.run_sync(
            self.lookup_path, os.path.join(path, "index.html")
        )
        if index_stat is not None and stat.S_ISREG(index_stat.st_mode):
            return self.file_response(index_path, index_stat, scope)

        content = await anyio.to_thread.run_sync(_listing, full_path)
        return HTMLResponse(content)

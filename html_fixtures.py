"""
Inline HTML builders shaped like the archive site's listing, detail and
download pages.
"""


def pagination_page(labels):
    items = "".join(f'<li class="page-item"><a class="page-link" href="#">{label}</a></li>' for label in labels)
    return f"""<html><body>
    <ul id="searchPagination" class="pagination">{items}</ul>
    </body></html>"""


def listing_page(entries):
    """entries: list of (title, [(version, href or None), ...])"""
    blocks = []
    for title, versions in entries:
        links = []
        for version, href in versions:
            attr = f' href="{href}"' if href is not None else ""
            links.append(f'<li class="nav-link"><a{attr}> {version} </a></li>')
        blocks.append(f"""
        <div class="media">
          <img class="mr-3" src="/res/img/icon.png">
          <div class="media-body">
            <h5 class="mt-0"><a href="#"> {title} </a></h5>
            <ul class="nav">{''.join(links)}</ul>
          </div>
        </div>""")
    return f"<html><body>{''.join(blocks)}</body></html>"


def file_row(name, guid, version, language, arch, size, checksum):
    arch_cell = f'<img src="/res/img/arch.png" title="{arch}">' if arch is not None else ""
    size_cell = f'<span title="{checksum}">{size}</span>' if checksum is not None else size
    link = f'<a href="/download/{guid}">{name}</a>' if guid is not None else name
    return f"""<tr>
      <td>{link}</td>
      <td>{version}</td>
      <td>{language}</td>
      <td>{arch_cell}</td>
      <td>{size_cell}</td>
      <td>1234</td>
    </tr>"""


def detail_page(rows):
    return f"""<html><body>
    <table id="downloadsTable" class="table">
      <thead><tr><th>Name</th><th>Version</th><th>Language</th><th>Arch</th><th>Size</th><th>Downloads</th></tr></thead>
      <tbody>{''.join(rows)}</tbody>
    </table>
    </body></html>"""


def download_page(ipfs_link=None, mirrors=()):
    local = f'<div id="localClientLink"><a href="{ipfs_link}">IPFS</a></div>' if ipfs_link else ""
    items = "".join(f'<a class="list-group-item" href="{m}">Mirror</a>' for m in mirrors)
    return f"""<html><body>
    {local}
    <div id="mirrorsList" class="list-group">{items}</div>
    </body></html>"""

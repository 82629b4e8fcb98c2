from __future__ import annotations

STYLESHEET_CSS = """\
:root {
  --primary: #333333;
  --secondary: #cccccc;
}
* { box-sizing: border-box; }
body {
  margin: 0;
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
  color: #222;
}
a { color: var(--primary); }
.topbar {
  background: var(--primary);
  color: #fff;
  padding: 0.75rem 1.25rem;
  font-weight: 600;
}
.layout { display: flex; min-height: calc(100vh - 3rem); }
.menu {
  flex: 0 0 16rem;
  background: var(--secondary);
  padding: 1rem;
}
.menu-list { list-style: none; margin: 0; padding: 0; }
.menu-list li { margin: 0.25rem 0; }
.menu-list li.is-active > a { font-weight: 700; }
.content { flex: 1; padding: 1rem 2rem; min-width: 0; }
.breadcrumb ul { list-style: none; display: flex; flex-wrap: wrap; padding: 0; margin: 0 0 1rem; }
.breadcrumb li + li::before { content: "/"; padding: 0 0.5rem; color: #999; }
.tabs {
  list-style: none;
  display: flex;
  flex-wrap: wrap;
  gap: 0.25rem;
  padding: 0;
  border-bottom: 2px solid var(--secondary);
}
.tabs li a { display: block; padding: 0.5rem 1rem; text-decoration: none; }
.tabs li.is-active a { border-bottom: 3px solid var(--primary); font-weight: 700; }
.diagram-index { margin: 1rem 0; }
.diagram { margin: 2rem 0; }
.svg-container svg { max-width: 100%; height: auto; }
.table { border-collapse: collapse; width: 100%; }
.table th, .table td { border: 1px solid #ddd; padding: 0.4rem 0.6rem; text-align: left; }
.notification.is-danger { border-left: 4px solid #c0392b; background: #fdecea; padding: 1rem; }
pre.literal { white-space: pre-wrap; }
"""

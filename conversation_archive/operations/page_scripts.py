"""JavaScript evaluated inside conversation pages."""

READ_TITLE = """
selector => document.querySelector(selector)?.textContent ?? ""
"""

HAS_CLASS = """
className => document.getElementsByClassName(className).length > 0
"""

# Removes chrome that is useless or broken in an offline copy. Every lookup
# tolerates a missing element.
CLEAN_UP_PAGE = """
({ iconUrlTemplate }) => {
  // About Gemini
  document.getElementsByTagName("top-bar-actions")[0]?.remove()

  // Sign in buttons
  document.getElementsByClassName("boqOnegoogleliteOgbOneGoogleBar")[0]?.remove()
  document.getElementsByClassName("share-landing-page_footer")[0]?.remove()

  // Copy and flag buttons
  for (const matButton of document.querySelectorAll("[mat-icon-button]")) matButton.remove()

  // The icon font is heavy, swap each icon for the equivalent hosted SVG
  const matIcons = document.getElementsByTagName("mat-icon")
  while (matIcons.length > 0) {
    const matIcon = matIcons[0]
    const iconName = matIcon.getAttribute("fonticon") ?? matIcon.textContent.trim()
    const size = getComputedStyle(matIcon).fontSize

    const img = document.createElement("img")
    img.src = iconUrlTemplate.replace("{name}", iconName).replace("{size}", size)
    img.style.width = size
    img.style.height = size
    matIcon.insertAdjacentElement("afterend", img)
    matIcon.remove()
  }

  // Disclaimer
  document.getElementsByClassName("share-viewer_footer_disclaimer")[0]?.remove()

  // Legal links
  const legalLinks = document.getElementsByClassName("share-viewer_legal-links")[0]
  if (legalLinks) {
    legalLinks.style.paddingTop = "0"
    while (legalLinks.children.length > 0) legalLinks.children[0].remove()
  }

  const scriptTags = document.getElementsByTagName("script")
  while (scriptTags.length > 0) scriptTags[0].remove()

  // Inline custom properties would otherwise keep every variable alive
  for (const element of document.querySelectorAll("[style]")) {
    if (element.getAttribute("style").includes("--")) element.removeAttribute("style")
  }
}
"""

GET_PAGE_DATA = """
async options => await singlefile.getPageData(options)
"""
